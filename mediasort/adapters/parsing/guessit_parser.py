"""
Implementation du parser de noms de fichiers avec guessit.

Ce module fournit GuessitFilenameParser qui implemente IFilenameParser
pour extraire titre, annee, saison et episode des noms de fichiers video.
"""

from pathlib import Path
from typing import Any, Optional

from guessit import guessit

from mediasort.core.ports.parser import IFilenameParser
from mediasort.core.value_objects.parsed_info import MediaType, ParsedFilename

# Correspondance MediaType <-> type guessit
_GUESSIT_TYPES = {
    MediaType.MOVIE: "movie",
    MediaType.SERIES: "episode",
}


class GuessitFilenameParser(IFilenameParser):
    """
    Parser de noms de fichiers utilisant la bibliotheque guessit.

    Un resultat avec saison et episode est toujours une serie, meme si
    guessit l'a classe autrement. Sans titre detecte, le nom du fichier
    sans extension sert de titre.
    """

    def parse(
        self, filename: str, type_hint: Optional[MediaType] = None
    ) -> ParsedFilename:
        """
        Parse un nom de fichier video (sans le chemin).

        Args:
            filename: Nom du fichier a parser
            type_hint: Force le type guessit si MOVIE ou SERIES
        """
        options = {}
        if type_hint in _GUESSIT_TYPES:
            options["type"] = _GUESSIT_TYPES[type_hint]
        result = guessit(filename, options)

        season = self._first_int(result.get("season"))
        episode, episode_end = self._episode_bounds(result.get("episode"))

        return ParsedFilename(
            title=self._title(result) or Path(filename).stem,
            year=self._first_int(result.get("year")),
            media_type=self._media_type(result, type_hint, season, episode),
            season=season,
            episode=episode,
            episode_end=episode_end,
            episode_title=result.get("episode_title"),
        )

    @staticmethod
    def _media_type(
        result: dict[str, Any],
        type_hint: Optional[MediaType],
        season: Optional[int],
        episode: Optional[int],
    ) -> MediaType:
        if type_hint in _GUESSIT_TYPES:
            return type_hint
        if season is not None and episode is not None:
            return MediaType.SERIES
        for media_type, guessit_type in _GUESSIT_TYPES.items():
            if result.get("type") == guessit_type:
                return media_type
        return MediaType.UNKNOWN

    @staticmethod
    def _title(result: dict[str, Any]) -> Optional[str]:
        title = result.get("title") or result.get("alternative_title")
        if isinstance(title, list):
            title = title[0] if title else None
        return str(title) if title else None

    @staticmethod
    def _first_int(value: Any) -> Optional[int]:
        """guessit retourne une liste quand plusieurs valeurs sont detectees."""
        if isinstance(value, list):
            value = value[0] if value else None
        if value is None:
            return None
        return int(value)

    @classmethod
    def _episode_bounds(cls, value: Any) -> tuple[Optional[int], Optional[int]]:
        """(premier, dernier) episode ; dernier a None hors multi-episode."""
        start = cls._first_int(value)
        if isinstance(value, list) and len(value) > 1:
            return start, int(value[-1])
        return start, None
