"""
Adaptateurs de parsing des noms de fichiers video.
"""

from mediasort.adapters.parsing.guessit_parser import GuessitFilenameParser

__all__ = ["GuessitFilenameParser"]
