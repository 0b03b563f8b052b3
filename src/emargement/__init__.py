"""emargement — sessões de formação, assinaturas de presença e lembretes."""

__version__ = "0.1.0"
