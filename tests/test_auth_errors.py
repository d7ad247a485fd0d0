"""Tests pour la validation des tokens d'accès.

Ce module teste l'extraction de l'identité (`sub`) et les cas de tokens invalides, expirés ou
incomplets.
"""

from __future__ import annotations

import jwt

from backend.domain.auth import create_access_token, decode_token

SECRET = "test_secret"
ALG = "HS256"


def test_token_roundtrip_exposes_sub() -> None:
    """Teste que le claim `sub` est restitué."""
    token = create_access_token(SECRET, ALG, 5, {"sub": "user-9", "email": "u@test.io"})
    data = decode_token(token, SECRET, ALG)
    assert data is not None
    assert data.sub == "user-9"
    assert data.email == "u@test.io"


def test_wrong_secret_is_rejected() -> None:
    """Teste un token signé avec une autre clé."""
    token = create_access_token("other", ALG, 5, {"sub": "user-9"})
    assert decode_token(token, SECRET, ALG) is None


def test_expired_token_is_rejected() -> None:
    """Teste un token expiré."""
    token = create_access_token(SECRET, ALG, -1, {"sub": "user-9"})
    assert decode_token(token, SECRET, ALG) is None


def test_token_without_sub_is_rejected() -> None:
    """Teste qu'un token sans identité est refusé."""
    token = jwt.encode({"email": "u@test.io"}, SECRET, algorithm=ALG)
    assert decode_token(token, SECRET, ALG) is None


def test_garbage_token_is_rejected() -> None:
    """Teste une chaîne qui n'est pas un JWT."""
    assert decode_token("not.a.valid.token", SECRET, ALG) is None
