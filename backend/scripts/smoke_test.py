"""
Quick smoke test for the AI generation endpoints using TestClient.

Checks:
- GET /health
- POST /ai/generate
- POST /ai/generate/{product_id} (category back-fill)
- quota exhaustion (429 + Retry-After)
"""

import os

os.environ.setdefault("LLM_PROVIDER", "fake")

from fastapi.testclient import TestClient

from backend.app.main import app
from backend.core.container import container
from backend.domain.auth import create_access_token


def main() -> None:
    """
    Point d'entrée principal pour les tests de fumée.

    Exécute une série d'appels de base avec le LLM factice et le dépôt en mémoire.
    """
    client = TestClient(app)
    settings = container.settings
    token = create_access_token(
        settings.JWT_SECRET, settings.JWT_ALG, 5, {"sub": "smoke-user"}
    )
    headers = {"Authorization": f"Bearer {token}"}

    r = client.get("/health")
    print("/health:", r.status_code, r.json())

    r = client.post(
        "/ai/generate",
        json={"title": "Wireless Mouse", "attributes": {"color": "black"}},
        headers=headers,
    )
    print("/ai/generate:", r.status_code, r.json().get("category"))

    product = container.store.add_product("smoke-user", "Mechanical Keyboard", {"layout": "US"})
    r = client.post(f"/ai/generate/{product.id}", json={"language": "id"}, headers=headers)
    print("/ai/generate/{id}:", r.status_code, container.store.get_product(product.id).category)

    for _ in range(settings.AI_QUOTA_POINTS):
        r = client.post("/ai/generate", json={"title": "Quota"}, headers=headers)
    print("quota:", r.status_code, r.headers.get("Retry-After"))

    print("Smoke test OK")


if __name__ == "__main__":
    main()
