"""Contrato do Notifier (entrega ao ambiente do operador)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Capacidade de entregar uma notificação ao operador.

    Best-effort e fire-and-forget: permissão/disponibilidade do canal é
    problema do ambiente, não do núcleo. Implementações não devem lançar.
    """

    @abstractmethod
    def deliver(self, title: str, body: str) -> None: ...

    def close(self) -> None:
        """Libera recursos do canal (conexões HTTP); padrão sem efeito."""
        return None
