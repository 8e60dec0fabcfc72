"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MediaType : Type de media (MOVIE, SERIES, UNKNOWN)
- ParsedFilename : Informations extraites du parsing d'un nom de fichier
- ResolvedMatch : Correspondance produite par le resolveur
- PathConfig / SortConfig : Configuration immutable d'un tri
"""

from mediasort.core.value_objects.parsed_info import (
    MediaType,
    ParsedFilename,
)
from mediasort.core.value_objects.resolved_match import ResolvedMatch
from mediasort.core.value_objects.sort_config import (
    PathConfig,
    SortConfig,
    parse_extensions,
)

__all__ = [
    "MediaType",
    "ParsedFilename",
    "ResolvedMatch",
    "PathConfig",
    "SortConfig",
    "parse_extensions",
]
