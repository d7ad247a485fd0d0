"""
Registre de quotas de génération par identité.

Chaque identité dispose d'une fenêtre fixe (24 h par défaut) ouverte à sa première admission et
d'un budget de points (5 par défaut). L'état vit uniquement en mémoire du processus : il n'est pas
conservé au redémarrage du service.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

DEFAULT_POINTS = 5
DEFAULT_WINDOW_SECONDS = 24 * 60 * 60


@dataclass
class QuotaDecision:
    """Résultat d'une demande d'admission."""

    allowed: bool
    remaining: int
    retry_after: float | None = None


@dataclass
class _Window:
    started_at: float | None = None
    consumed: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock)


class QuotaLedger:
    """Compteur par identité avec check-and-increment atomique.

    Un verrou par identité sérialise les admissions concurrentes d'une même identité ; le verrou
    du registre ne protège que la création paresseuse des entrées.
    """

    def __init__(
        self,
        points: int = DEFAULT_POINTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialise le registre (budget, durée de fenêtre, horloge monotone)."""
        self.points = max(1, int(points))
        self.window_seconds = float(window_seconds)
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._registry_lock = threading.Lock()

    def _window_for(self, identity: str) -> _Window:
        window = self._windows.get(identity)
        if window is None:
            with self._registry_lock:
                window = self._windows.setdefault(identity, _Window())
        return window

    def _expired(self, window: _Window, now: float) -> bool:
        return window.started_at is None or now - window.started_at >= self.window_seconds

    def admit(self, identity: str) -> QuotaDecision:
        """Consomme un point si le budget de la fenêtre active le permet.

        Une tentative refusée ne consomme rien ; `retry_after` vaut le temps restant avant
        l'expiration de la fenêtre courante, en secondes.
        """
        window = self._window_for(identity)
        with window.lock:
            now = self._clock()
            if self._expired(window, now):
                window.started_at, window.consumed = now, 0
            if window.consumed >= self.points:
                retry_after = window.started_at + self.window_seconds - now
                return QuotaDecision(allowed=False, remaining=0, retry_after=retry_after)
            window.consumed += 1
            return QuotaDecision(allowed=True, remaining=self.points - window.consumed)

    def peek(self, identity: str) -> int:
        """Retourne le nombre de points encore disponibles, sans rien consommer."""
        window = self._windows.get(identity)
        if window is None:
            return self.points
        with window.lock:
            if self._expired(window, self._clock()):
                return self.points
            return self.points - window.consumed

    def reset(self, identity: str | None = None) -> None:
        """Remet à zéro la fenêtre d'une identité, ou de toutes si `identity` est None.

        Les entrées restent en place et sont vidées sous leur propre verrou.
        """
        with self._registry_lock:
            if identity is None:
                windows = list(self._windows.values())
            else:
                window = self._windows.get(identity)
                windows = [window] if window is not None else []
        for window in windows:
            with window.lock:
                window.started_at, window.consumed = None, 0
