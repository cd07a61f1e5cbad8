"""Contrato de la capa de notificaciones.

La capa de presentación recibe mensajes legibles con su severidad; el Core no
consume ningún valor de vuelta.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import NotificationLevel


@runtime_checkable
class Notifier(Protocol):
    def __call__(self, message: str, level: NotificationLevel) -> None:
        ...


def silent_notifier(message: str, level: NotificationLevel) -> None:
    """Notifier nulo para contextos sin UI (scripts, tests)."""

    return None
