"""
Taxonomie des erreurs de MediaSort.

Deux familles d'erreurs :
- Fatales (ConfigError, ScanError, WatchError) : remontent jusqu'a la CLI
  qui affiche un message unique et termine avec un code non nul.
- Par fichier (SortError et sous-classes) : contenues dans le dispatcher,
  journalisees avec l'identifiant du candidat, sans interrompre le lot.
"""

from pathlib import Path
from typing import Optional


class MediaSortError(Exception):
    """Exception racine de l'application."""


class ConfigError(MediaSortError):
    """Options contradictoires ou manquantes, detectee avant tout scan."""


class ScanError(MediaSortError):
    """Echec stat/listing, repertoire sans mode recursif, ou aucun fichier trouve."""


class WatchError(MediaSortError):
    """Impossible d'etablir la surveillance des repertoires."""


class SortError(MediaSortError):
    """Erreur limitee a un seul candidat."""


class ResolveError(SortError):
    """Le resolveur n'a pas pu identifier le fichier."""


class PathFormatError(SortError):
    """Le gabarit de chemin n'a pas pu etre applique au resultat."""


class UnsupportedMediaTypeError(SortError):
    """Type de media sans repertoire de base associe."""


class DestinationExistsError(SortError):
    """
    Un fichier existe deja a la destination et l'ecrasement n'est pas autorise.

    Attributs:
        destination: Chemin du fichier deja present
    """

    def __init__(self, destination: Path) -> None:
        self.destination = destination
        super().__init__(
            f"File already exists '{destination}' (try setting --overwrite)"
        )


class PlacementError(SortError):
    """Echec de creation des repertoires ou du deplacement du fichier."""

    def __init__(self, message: str, cause: Optional[OSError] = None) -> None:
        self.cause = cause
        super().__init__(f"{message}: {cause}" if cause else message)
