"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- cli/ : Interface ligne de commande (Typer + Rich)
- api/ : Client API externe (TMDB) avec cache et retry
- parsing/ : Parsing de noms de fichiers (guessit)
- file_system.py : Opérations sur le système de fichiers

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""

from mediasort.adapters.file_system import FileSystemAdapter
from mediasort.adapters.parsing.guessit_parser import GuessitFilenameParser

__all__ = [
    "FileSystemAdapter",
    "GuessitFilenameParser",
]
