"""
Service de formatage des chemins de destination.

Ce module transforme une correspondance resolue en chemin relatif
a partir des gabarits de PathConfig (syntaxe str.format).

Format series par defaut : Titre/Season 01/Titre - S01E02.ext
Format films par defaut : Titre (Annee)/Titre (Annee).ext
"""

import unicodedata
from pathlib import Path, PurePosixPath
from typing import Any, Optional

from pathvalidate import sanitize_filename

from mediasort.core.errors import PathFormatError
from mediasort.core.ports.resolver import IPathFormatter
from mediasort.core.value_objects import MediaType, PathConfig, ResolvedMatch


# Longueur maximale d'un composant de chemin
MAX_FILENAME_LENGTH = 200

# Caractères spéciaux remplacés par un tiret avant pathvalidate
SPECIAL_CHARS_TO_DASH = frozenset({":", "/", "\\", "*", '"', "<", ">", "|"})

# Placeholder pour conserver les points de suspension
_ELLIPSIS_PLACEHOLDER = "…"

_LIGATURES = {
    "œ": "oe",
    "Œ": "Oe",
    "æ": "ae",
    "Æ": "Ae",
}


def sanitize_for_filesystem(text: str) -> str:
    """
    Nettoie une chaîne pour l'utiliser comme composant de chemin.

    Transformations appliquées :
    - Normalisation Unicode NFKC et ligatures (œ->oe, æ->ae)
    - Caractères spéciaux (: / \\ * " < > |) -> tiret
    - Point d'interrogation (?) -> points de suspension (...)
    - Troncature à 200 caractères

    Args:
        text: Texte à nettoyer.

    Returns:
        Texte valide pour un nom de fichier (éventuellement vide).
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFKC", text)
    for ligature, replacement in _LIGATURES.items():
        text = text.replace(ligature, replacement)

    for char in SPECIAL_CHARS_TO_DASH:
        text = text.replace(char, "-")

    # pathvalidate supprime les points finaux : on protège les "?"
    text = text.replace("?", _ELLIPSIS_PLACEHOLDER)
    text = sanitize_filename(text, platform="universal", replacement_text="")
    text = text.replace(_ELLIPSIS_PLACEHOLDER, "...")

    return text[:MAX_FILENAME_LENGTH].strip()


def format_episode_range(episode: Optional[int], episode_end: Optional[int]) -> str:
    """
    Formate la plage d'episodes.

    Exemples : (2, None) -> "E02", (2, 3) -> "E02-E03".
    """
    if episode is None:
        return ""
    if episode_end is not None and episode_end > episode:
        return f"E{episode:02d}-E{episode_end:02d}"
    return f"E{episode:02d}"


class PathFormatterService(IPathFormatter):
    """
    Formateur de chemins relatifs de destination.

    Le repertoire de base (TV ou films) n'est pas inclus : il est
    choisi par le placeur selon le type de media.
    """

    def format(self, match: ResolvedMatch, path_config: PathConfig) -> Path:
        """
        Calcule le chemin relatif de destination.

        Raises:
            PathFormatError: gabarit invalide, champ manquant ou chemin
                             resultant vide, absolu ou remontant (..)
        """
        if match.media_type == MediaType.SERIES:
            if match.season is None or match.episode is None:
                raise PathFormatError(
                    f"Missing season/episode to format '{match.path.name}'"
                )
            template = path_config.tv_template
        else:
            template = path_config.movie_template

        fields = self._build_fields(match)
        try:
            formatted = template.format_map(fields)
        except KeyError as e:
            raise PathFormatError(f"Unknown placeholder {e} in template '{template}'") from e
        except (ValueError, TypeError, IndexError, AttributeError) as e:
            raise PathFormatError(f"Invalid template '{template}': {e}") from e

        return self._validate(formatted)

    @staticmethod
    def _build_fields(match: ResolvedMatch) -> dict[str, Any]:
        """Construit les champs disponibles dans les gabarits."""
        title = sanitize_for_filesystem(match.title)
        if not title:
            raise PathFormatError(f"Empty title for '{match.path.name}'")

        episode_title = sanitize_for_filesystem(match.episode_title or "")
        return {
            "title": title,
            "year": match.year if match.year is not None else "",
            "year_suffix": f" ({match.year})" if match.year else "",
            "season": match.season,
            "episode": match.episode,
            "episode_range": format_episode_range(match.episode, match.episode_end),
            "episode_title": episode_title,
            "ext": match.extension.lower(),
        }

    @staticmethod
    def _validate(formatted: str) -> Path:
        """Verifie que le resultat est un chemin relatif sans remontee."""
        if not formatted.strip():
            raise PathFormatError("Formatted destination path is empty")

        relative = PurePosixPath(formatted.replace("\\", "/"))
        if relative.is_absolute() or Path(formatted).is_absolute():
            raise PathFormatError(f"Destination must be relative (got '{formatted}')")

        parts = relative.parts
        if any(part == ".." for part in parts):
            raise PathFormatError(f"Destination cannot contain '..' (got '{formatted}')")
        if any(not part.strip() for part in parts):
            raise PathFormatError(f"Empty path component in '{formatted}'")

        return Path(*parts)
