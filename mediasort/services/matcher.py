"""
Scoring des resultats de recherche TMDB.

Le titre extrait du nom de fichier est compare (rapidfuzz, ordre des mots
ignore) au titre localise et au titre original de chaque resultat.

- Films : 67% titre + 33% annee (titre seul si le fichier n'a pas d'annee)
- Series : 100% titre
"""

from dataclasses import replace
from typing import Optional

from rapidfuzz import fuzz, utils

from mediasort.core.ports.api_clients import SearchResult

MOVIE_TITLE_WEIGHT = 0.67
MOVIE_YEAR_WEIGHT = 0.33

# Annee : +/-1 tolere, puis -25 points par annee d'ecart
YEAR_TOLERANCE = 1
YEAR_PENALTY = 25


def title_score(query: str, *titles: Optional[str]) -> float:
    """Meilleure similarite (0-100) entre la requete et les titres fournis."""
    scores = [
        fuzz.token_sort_ratio(query, title, processor=utils.default_process)
        for title in titles
        if title
    ]
    return max(scores, default=0.0)


def year_score(query_year: Optional[int], candidate_year: Optional[int]) -> float:
    if query_year is None or candidate_year is None:
        return 0.0
    excess = abs(query_year - candidate_year) - YEAR_TOLERANCE
    return max(0.0, 100.0 - max(excess, 0) * YEAR_PENALTY)


def calculate_movie_score(
    query_title: str,
    query_year: Optional[int],
    candidate_title: str,
    candidate_year: Optional[int],
    candidate_original_title: Optional[str] = None,
) -> float:
    """
    Score d'un film, arrondi a 2 decimales.

    Sans annee cote fichier, seul le titre compte : une annee absente
    ne doit pas faire echouer une correspondance parfaite.
    """
    title = title_score(query_title, candidate_title, candidate_original_title)
    if query_year is None:
        return round(title, 2)

    total = title * MOVIE_TITLE_WEIGHT + year_score(query_year, candidate_year) * MOVIE_YEAR_WEIGHT
    return round(total, 2)


def calculate_series_score(
    query_title: str,
    candidate_title: str,
    candidate_original_title: Optional[str] = None,
) -> float:
    """Score d'une serie : titre uniquement."""
    return round(title_score(query_title, candidate_title, candidate_original_title), 2)


class MatcherService:
    """
    Classement des resultats de recherche par score de correspondance.

    Sans etat : partage entre les taches de tri concurrentes.
    """

    def score_results(
        self,
        results: list[SearchResult],
        query_title: str,
        query_year: Optional[int] = None,
        is_series: bool = False,
    ) -> list[SearchResult]:
        """
        Retourne les resultats avec leur score, du meilleur au moins bon.

        A score egal, l'ordre de pertinence TMDB est conserve (tri stable).
        """
        def score(result: SearchResult) -> float:
            if is_series:
                return calculate_series_score(query_title, result.title, result.original_title)
            return calculate_movie_score(
                query_title, query_year, result.title, result.year, result.original_title
            )

        scored = [replace(result, score=score(result)) for result in results]
        return sorted(scored, key=lambda r: r.score, reverse=True)

    def best_match(
        self,
        results: list[SearchResult],
        query_title: str,
        query_year: Optional[int],
        is_series: bool,
        threshold: float,
    ) -> Optional[SearchResult]:
        """Meilleur resultat s'il atteint le seuil, sinon None."""
        scored = self.score_results(results, query_title, query_year, is_series)
        if scored and scored[0].score >= threshold:
            return scored[0]
        return None
