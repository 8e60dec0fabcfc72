"""
Interfaces ports pour les clients API.

Interfaces abstraites (ports) définissant les contrats pour les APIs média
externes utilisées par le résolveur.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class SearchResult:
    """
    Résultat de recherche depuis une API média.

    Plusieurs résultats sont retournés et scorés par rapport à la requête originale.

    Attributs :
        id : ID spécifique à l'API
        title : Titre localisé depuis l'API
        original_title : Titre en langue originale (pour matching bilingue)
        year : Année de sortie/diffusion
        score : Score de correspondance (0-100) calculé par le matcher
        source : Identifiant de la source API ("tmdb")
    """

    id: str
    title: str
    original_title: Optional[str] = None
    year: Optional[int] = None
    score: float = 0.0
    source: str = ""


class IMediaAPIClient(ABC):
    """
    Interface de base pour les APIs de métadonnées média.

    Définit le contrat pour rechercher des films et des séries
    depuis une API externe.
    """

    @abstractmethod
    async def search(
        self,
        query: str,
        year: Optional[int] = None,
    ) -> list[SearchResult]:
        """
        Recherche des films par titre.

        Args :
            query : Titre à rechercher
            year : Année de sortie optionnelle pour affiner le scoring

        Retourne :
            Liste de SearchResult (vide si aucun résultat)
        """
        ...

    @abstractmethod
    async def search_series(
        self,
        query: str,
        year: Optional[int] = None,
    ) -> list[SearchResult]:
        """
        Recherche des séries TV par titre.

        Args :
            query : Titre à rechercher
            year : Année de première diffusion optionnelle

        Retourne :
            Liste de SearchResult (vide si aucun résultat)
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Identifiant de la source API (ex: "tmdb")."""
        ...
