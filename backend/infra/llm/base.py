"""Interface de base pour les fournisseurs de modèles de langage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal, overload


class LLM(ABC):
    """Interface abstraite : un prompt texte en entrée, un texte brut en sortie.

    Une invocation correspond à exactement un appel amont ; les erreurs de transport sont
    propagées telles quelles à l'appelant.
    """

    model: str = "unknown"

    # Cas le plus spécifique : with_usage=True -> retourne (str, dict)
    @overload
    def complete(
        self, prompt: str, *, with_usage: Literal[True]
    ) -> tuple[str, dict[str, int]]: ...

    # Cas par défaut / False : retourne str
    @overload
    def complete(self, prompt: str, *, with_usage: Literal[False] = False) -> str: ...

    @abstractmethod
    def complete(
        self, prompt: str, *, with_usage: bool = False
    ) -> str | tuple[str, dict[str, int]]:
        """Génère une réponse textuelle à partir d'un prompt."""
        ...
