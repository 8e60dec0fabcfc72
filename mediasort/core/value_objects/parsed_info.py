"""
Resultat brut du parsing d'un nom de fichier (guessit).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaType(Enum):
    """Categorie de destination : serie, film, ou indeterminee."""

    MOVIE = "movie"
    SERIES = "series"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParsedFilename:
    """
    Champs extraits d'un nom de fichier, avant toute recherche API.

    episode_end n'est renseigne que pour un fichier multi-episode
    (ex: S05E09E10 -> episode=9, episode_end=10).
    """

    title: str
    year: Optional[int] = None
    media_type: MediaType = MediaType.UNKNOWN
    season: Optional[int] = None
    episode: Optional[int] = None
    episode_end: Optional[int] = None
    episode_title: Optional[str] = None
