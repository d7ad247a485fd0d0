"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
"""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def resolve_env_file() -> Path | str:
    """Détermine le fichier .env à utiliser.

    Priorité:
    1) ENV_FILE (chemin explicite)
    2) .env.{APP_ENV} si présent
    3) .env (défaut, même absent)
    """
    explicit = os.getenv("ENV_FILE")
    if explicit:
        return explicit
    cwd = Path.cwd()
    specific = cwd / f".env.{os.getenv('APP_ENV', 'dev')}"
    if specific.exists():
        return specific
    return cwd / ".env"


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=resolve_env_file(),
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )
    APP_NAME: str = "marketplace-ai-backend"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = False
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Persistance (DATABASE_URL absent -> dépôt en mémoire)
    DATABASE_URL: str | None = None
    DB_CREATE_TABLES: bool = False

    # JWT (l'identité est le claim `sub`)
    JWT_SECRET: str = "dev-secret-change-me"
    JWT_ALG: str = "HS256"

    # Fournisseur LLM: "gemini" | "openai" | "fake" (dev local, réponses déterministes)
    LLM_PROVIDER: str = "gemini"
    LLM_MODEL: str | None = None
    GEMINI_API_KEY: str | None = None
    OPENAI_API_KEY: str | None = None
    # Politique locale: timeout de l'appel amont, en secondes
    LLM_TIMEOUT_SECONDS: float = 30.0

    # Quota de génération par utilisateur (en mémoire, non durable)
    AI_QUOTA_POINTS: int = 5
    AI_QUOTA_WINDOW_SECONDS: int = 24 * 60 * 60

    # Limitation de cardinalité des labels métriques (CSV via .env, peut être vide)
    ALLOWED_LLM_MODELS: list[str] = []


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
