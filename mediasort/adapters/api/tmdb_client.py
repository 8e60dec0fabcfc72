"""
Client TMDB pour la recherche de films et de series.

Implemente l'interface IMediaAPIClient pour TMDB (The Movie Database).
Utilise le cache persistant et le mecanisme de retry pour gerer
le rate limiting provoque par le tri concurrent.

Usage:
    cache = APICache()
    client = TMDBClient(api_key="your_key", cache=cache)
    movies = await client.search("Avatar", year=2009)
    shows = await client.search_series("Breaking Bad")
    await client.close()
"""

from typing import Optional

import httpx
from loguru import logger

from mediasort.adapters.api.cache import APICache
from mediasort.adapters.api.retry import request_with_retry
from mediasort.core.ports.api_clients import IMediaAPIClient, SearchResult


class TMDBClient(IMediaAPIClient):
    """
    Client API TMDB pour l'identification des films et series.

    Implemente IMediaAPIClient avec:
    - Recherche de films (/search/movie) et de series (/search/tv)
    - Cache persistant des recherches (24h)
    - Retry automatique sur rate limiting (429) et erreurs reseau

    Un client construit sans cle API est desactive (enabled == False) :
    le resolveur passe alors en mode hors ligne.
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        language: str = "en-US",
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API v3 ou Read Access Token v4 (None = desactive)
            cache: Instance APICache pour le caching des resultats
            language: Langue des titres retournes (ex: "en-US", "fr-FR")
        """
        self._api_key = api_key
        self._cache = cache
        self._language = language
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def enabled(self) -> bool:
        """Vrai si une cle API est configuree."""
        return bool(self._api_key)

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            params = {}

            if self._api_key and len(self._api_key) > 40:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key or ""

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=30.0,
            )
        return self._client

    async def search(
        self,
        query: str,
        year: Optional[int] = None,
    ) -> list[SearchResult]:
        """
        Recherche des films par titre.

        Args:
            query: Titre du film a rechercher
            year: Annee de sortie (utilisee pour le scoring, pas comme filtre)

        Returns:
            Liste de SearchResult (vide si aucun resultat)
        """
        return await self._search(
            kind="movie",
            query=query,
            year=year,
            title_field="title",
            original_title_field="original_title",
            date_field="release_date",
        )

    async def search_series(
        self,
        query: str,
        year: Optional[int] = None,
    ) -> list[SearchResult]:
        """
        Recherche des series TV par titre.

        Args:
            query: Titre de la serie
            year: Annee de premiere diffusion (scoring uniquement)

        Returns:
            Liste de SearchResult (vide si aucun resultat)
        """
        return await self._search(
            kind="tv",
            query=query,
            year=year,
            title_field="name",
            original_title_field="original_name",
            date_field="first_air_date",
        )

    async def _search(
        self,
        kind: str,
        query: str,
        year: Optional[int],
        title_field: str,
        original_title_field: str,
        date_field: str,
    ) -> list[SearchResult]:
        """
        Recherche commune films/series avec le pattern cache-first.

        L'annee n'est pas envoyee a l'API : elle est souvent decalee d'un an
        dans les noms de fichiers et sert uniquement au scoring.
        """
        cache_key = APICache.search_key(self.source, kind, query, year)

        cached = await self._cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache TMDB", key=cache_key)
            return cached

        client = self._get_client()
        params = {
            "query": query,
            "language": self._language,
            "include_adult": "false",
        }
        response = await request_with_retry(
            client, "GET", f"/search/{kind}", params=params
        )
        data = response.json()

        results = []
        for item in data.get("results", []):
            # Format de date: YYYY-MM-DD (peut etre vide)
            date = item.get(date_field) or ""
            item_year = int(date[:4]) if date[:4].isdigit() else None

            localized_title = item.get(title_field, "")
            original_title = item.get(original_title_field, "")

            results.append(
                SearchResult(
                    id=str(item["id"]),
                    title=localized_title or original_title,
                    original_title=original_title if original_title != localized_title else None,
                    year=item_year,
                    source=self.source,
                )
            )

        logger.debug(
            "Recherche TMDB", kind=kind, query=query, result_count=len(results)
        )
        await self._cache.set_search(cache_key, results)
        return results

    async def close(self) -> None:
        """Ferme le client HTTP et libere les ressources reseau."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
