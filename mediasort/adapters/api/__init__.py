"""
Client API externe pour l'identification des medias.

- TMDBClient: The Movie Database (films et series)

Infrastructure partagee:
- APICache: Cache persistant des recherches (diskcache)
- RateLimitError / request_with_retry: retry avec backoff exponentiel (tenacity)
"""

from mediasort.adapters.api.cache import APICache
from mediasort.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from mediasort.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "APICache",
    "RateLimitError",
    "TMDBClient",
    "request_with_retry",
    "with_retry",
]
