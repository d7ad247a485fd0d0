"""
Script de serveur de développement avec LLM factice.

Ce script lance un serveur de développement avec un LLM factice pour le développement local sans
clé de fournisseur ni accès réseau.
"""

import os

# Ensure local-friendly defaults BEFORE importing app/modules
os.environ.setdefault("LLM_PROVIDER", "fake")

import uvicorn

from backend.app.main import app


def main():
    """
    Point d'entrée principal pour le serveur avec LLM factice.

    Lance l'application FastAPI avec un LLM déterministe (`LLM_PROVIDER=fake`).
    """
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port, reload=False)


if __name__ == "__main__":
    main()
