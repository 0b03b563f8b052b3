"""Protocolos de domínio (contratos entre application e infra)."""

from emargement.domain.protocols.notifier import Notifier
from emargement.domain.protocols.session_store import SessionStoreProtocol

__all__ = ["Notifier", "SessionStoreProtocol"]
