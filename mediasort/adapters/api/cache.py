"""
Cache persistant des recherches API.

Le cache utilise diskcache pour la persistence sur disque : en mode
surveillance, les memes fichiers sont re-resolus a chaque passage et
le cache evite de solliciter l'API pour des titres deja connus.
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les recherches API.

    Les acces disque sont deportes dans l'executor par defaut pour ne pas
    bloquer la boucle asyncio pendant le tri concurrent.

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_search("tmdb:movie:inception:2010", results)
        data = await cache.get("tmdb:movie:inception:2010")
    """

    SEARCH_TTL = 24 * 60 * 60  # 24 heures

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        """
        Args:
            cache_dir: Repertoire du cache (cree au premier acces)
        """
        self._cache_dir = str(cache_dir)
        self._cache: Optional[Cache] = None

    def _get_cache(self) -> Cache:
        """Ouvre le cache disque a la premiere utilisation (lazy init)."""
        if self._cache is None:
            self._cache = Cache(self._cache_dir)
        return self._cache

    @staticmethod
    def search_key(source: str, kind: str, query: str, year: Optional[int]) -> str:
        """Construit une cle stable: source:kind:requete:annee."""
        return f"{source}:{kind}:{query.strip().lower()}:{year or ''}"

    async def get(self, key: str) -> Optional[Any]:
        """Retourne la valeur stockee ou None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._get_cache().get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur (serializable) avec une duree de vie en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._get_cache().set, key, value, expire=ttl)
        )

    async def set_search(self, key: str, value: Any) -> None:
        """Stocke un resultat de recherche (TTL de 24h)."""
        await self.set(key, value, self.SEARCH_TTL)

    def close(self) -> None:
        """Ferme la connexion au cache si elle a ete ouverte."""
        if self._cache is not None:
            self._cache.close()
            self._cache = None
