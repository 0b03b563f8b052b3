"""Contratos Pydantic dos colaboradores de IA."""

from emargement.ai.contracts.intake import IntakeParticipant, IntakeResult
from emargement.ai.contracts.objectives import ObjectivesResult

__all__ = ["IntakeParticipant", "IntakeResult", "ObjectivesResult"]
