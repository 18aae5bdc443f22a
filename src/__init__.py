"""caselens: legal case document analysis pipeline."""

from caselens.version import __version__

__all__ = ["__version__"]
