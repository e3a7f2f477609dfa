"""
Exceptions block_views.

Le rendu ne lève jamais pour des données de bloc invalides (un bloc omis est
le seul signal). Seules les erreurs structurelles (manifest, upload) lèvent.
"""


class BlockViewsError(Exception):
    """Erreur de base du module."""


class UnknownBlockError(BlockViewsError, ValueError):
    """Type de bloc absent du registry."""

    def __init__(self, block_type: str, known=()):
        self.block_type = block_type
        self.known      = list(known)
        super().__init__(f"Bloc inconnu : {block_type!r}. Registry : {self.known}")


class InvalidSvgError(BlockViewsError, ValueError):
    """Fichier SVG refusé à l'upload."""
