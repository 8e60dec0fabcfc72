"""
Resultat structure produit par le resolveur pour un fichier.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mediasort.core.value_objects.parsed_info import MediaType


@dataclass(frozen=True)
class ResolvedMatch:
    """
    Correspondance resolue pour un fichier candidat.

    Immutable une fois produite. Contient assez d'informations pour
    le formatage du chemin de destination.

    Attributs:
        path: Chemin source canonique du fichier
        media_type: SERIES ou MOVIE
        title: Titre canonique (TMDB si disponible, sinon issu du parsing)
        year: Annee de sortie ou de premiere diffusion
        season: Numero de saison (series)
        episode: Numero d'episode (series)
        episode_end: Dernier episode pour les fichiers multi-episodes
        episode_title: Titre de l'episode si connu
        score: Score de correspondance (0-100), None en mode hors ligne
        source: Origine du resultat ("tmdb" ou "guessit")
    """

    path: Path
    media_type: MediaType
    title: str
    year: Optional[int] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    episode_end: Optional[int] = None
    episode_title: Optional[str] = None
    score: Optional[float] = None
    source: str = "guessit"

    @property
    def extension(self) -> str:
        """Extension du fichier source, point inclus."""
        return self.path.suffix
