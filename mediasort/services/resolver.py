"""
Service de resolution : chemin de fichier -> correspondance structuree.

Combine le parsing du nom de fichier (guessit) et, si une cle API est
configuree, une recherche TMDB scoree par le MatcherService. Sans cle,
le resolveur fonctionne hors ligne avec le titre issu du parsing.
"""

from pathlib import Path
from typing import Optional

import httpx
from loguru import logger

from mediasort.adapters.api.retry import RateLimitError
from mediasort.core.errors import ResolveError
from mediasort.core.ports.api_clients import IMediaAPIClient
from mediasort.core.ports.parser import IFilenameParser
from mediasort.core.ports.resolver import IResolver
from mediasort.core.value_objects import MediaType, ParsedFilename, ResolvedMatch
from mediasort.services.matcher import MatcherService


class ResolverService(IResolver):
    """
    Resolveur de metadonnees pour un fichier video.

    Etapes:
    1. Parsing du nom de fichier (saison + episode => serie, sinon film)
    2. Recherche TMDB et selection du meilleur resultat au-dessus du seuil
    3. Construction du ResolvedMatch avec le titre canonique

    Ce service ne garde aucun etat par fichier et peut etre appele
    simultanement par plusieurs taches de tri.
    """

    def __init__(
        self,
        filename_parser: IFilenameParser,
        matcher: MatcherService,
        api_client: Optional[IMediaAPIClient] = None,
        match_score_threshold: float = 70,
    ) -> None:
        """
        Args:
            filename_parser: Parser de noms de fichiers
            matcher: Service de scoring des resultats de recherche
            api_client: Client TMDB (None ou desactive = mode hors ligne)
            match_score_threshold: Score minimum (0-100) pour accepter un resultat
        """
        self._parser = filename_parser
        self._matcher = matcher
        self._api_client = api_client
        self._threshold = match_score_threshold

    @property
    def online(self) -> bool:
        """Vrai si les recherches passent par l'API."""
        if self._api_client is None:
            return False
        return getattr(self._api_client, "enabled", True)

    async def resolve(self, path: Path) -> ResolvedMatch:
        """
        Resout un fichier en correspondance structuree.

        Raises:
            ResolveError: parsing inexploitable, serie sans saison/episode,
                          erreur API ou aucun resultat au-dessus du seuil
        """
        parsed = self._parser.parse(path.name)
        media_type = self._media_type_of(parsed)

        if media_type == MediaType.SERIES and (parsed.season is None or parsed.episode is None):
            raise ResolveError(f"Missing season/episode number in '{path.name}'")
        if not parsed.title.strip():
            raise ResolveError(f"No title found in '{path.name}'")

        if not self.online:
            return self._build_match(path, parsed, media_type, parsed.title, parsed.year)

        title, year, score = await self._search(path, parsed, media_type)
        return self._build_match(
            path, parsed, media_type, title, year, score=score, source="tmdb"
        )

    @staticmethod
    def _media_type_of(parsed: ParsedFilename) -> MediaType:
        """Un numero d'episode suffit a classer en serie ; le reste est un film."""
        if parsed.media_type == MediaType.SERIES or parsed.episode is not None:
            return MediaType.SERIES
        return MediaType.MOVIE

    async def _search(
        self,
        path: Path,
        parsed: ParsedFilename,
        media_type: MediaType,
    ) -> tuple[str, Optional[int], float]:
        """
        Interroge l'API et retourne (titre, annee, score) du meilleur resultat.

        L'annee du fichier est conservee si l'API n'en fournit pas.
        """
        is_series = media_type == MediaType.SERIES
        try:
            if is_series:
                results = await self._api_client.search_series(parsed.title, parsed.year)
            else:
                results = await self._api_client.search(parsed.title, parsed.year)
        except (httpx.HTTPError, RateLimitError) as e:
            raise ResolveError(f"Search failed for '{parsed.title}': {e}") from e

        best = self._matcher.best_match(
            results, parsed.title, parsed.year, is_series, self._threshold
        )
        if best is None:
            raise ResolveError(
                f"No {media_type.value} match for '{parsed.title}'"
                f" ({len(results)} results below {self._threshold:g}%)"
            )

        logger.debug(
            "Correspondance trouvee",
            source=str(path),
            title=best.title,
            score=best.score,
        )
        return best.title, best.year or parsed.year, best.score

    @staticmethod
    def _build_match(
        path: Path,
        parsed: ParsedFilename,
        media_type: MediaType,
        title: str,
        year: Optional[int],
        score: Optional[float] = None,
        source: str = "guessit",
    ) -> ResolvedMatch:
        """Assemble le ResolvedMatch final."""
        is_series = media_type == MediaType.SERIES
        return ResolvedMatch(
            path=path,
            media_type=media_type,
            title=title,
            year=year,
            season=parsed.season if is_series else None,
            episode=parsed.episode if is_series else None,
            episode_end=parsed.episode_end if is_series else None,
            episode_title=parsed.episode_title if is_series else None,
            score=score,
            source=source,
        )
