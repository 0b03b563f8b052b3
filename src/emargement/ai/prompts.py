"""Prompts para as chamadas à OpenAI (em francês, como os documentos)."""

from __future__ import annotations


def get_intake_prompt() -> str:
    """System prompt para extração de convenções de formação."""
    return """Analyse ce document de convention de formation.

Extrais le nom de l'entreprise cliente : aide-toi du numéro de SIRET présent sur
le document pour identifier la bonne société juridique et ne pas la confondre avec
l'organisme de formation. Extrais également le sujet/nom de la formation, les dates
(format YYYY-MM-DD IMPÉRATIF, ex: 2023-10-27) et la liste des participants (nom,
email fictif si absent, et rôle/poste si présent). Si la formation dure plusieurs
jours, retourne toutes les dates dans le tableau.

Réponds uniquement en JSON valide avec ce format exact :
{
  "companyName": "...",
  "trainingName": "...",
  "dates": ["YYYY-MM-DD"],
  "participants": [{"name": "...", "email": "...", "role": "..."}]
}"""


def get_objectives_prompt(training_name: str) -> str:
    """Prompt para os objetivos pedagógicos do certificado."""
    return (
        "Génère une liste de 4 objectifs pédagogiques concis pour une attestation "
        f'de formation intitulée : "{training_name}". '
        'Réponds uniquement en JSON valide : {"objectives": ["...", "...", "...", "..."]}'
    )
