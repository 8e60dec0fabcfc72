"""
Relance des requetes TMDB avec backoff exponentiel (tenacity).

Une concurrence de tri trop elevee declenche du rate limiting (429) :
les requetes sont alors relancees avec un delai croissant et du jitter.
Les erreurs de transport (connexion, timeout) sont relancees de la meme
maniere ; les autres erreurs HTTP sont propagees immediatement.
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

RETRYABLE_ERRORS = (httpx.TransportError,)
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_MAX_WAIT = 60


class RateLimitError(Exception):
    """
    Reponse 429 Too Many Requests.

    Attributes:
        retry_after: Secondes annoncees par le header Retry-After, ou None.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _log_retry(state: RetryCallState) -> None:
    error = state.outcome.exception() if state.outcome else None
    logger.debug(
        "Nouvelle tentative API",
        attempt=state.attempt_number,
        error=str(error),
        wait=round(state.next_action.sleep, 2) if state.next_action else None,
    )


def with_retry(max_attempts: int = DEFAULT_MAX_ATTEMPTS, max_wait: int = DEFAULT_MAX_WAIT):
    """Decorateur : relance une coroutine sur 429 ou coupure reseau."""
    return retry(
        retry=retry_if_exception_type((RateLimitError, *RETRYABLE_ERRORS)),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


def _check_response(response: httpx.Response) -> httpx.Response:
    """429 -> RateLimitError, autres erreurs -> HTTPStatusError."""
    if response.status_code == 429:
        header = response.headers.get("Retry-After", "")
        raise RateLimitError(int(header) if header.isdigit() else None)
    response.raise_for_status()
    return response


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP, relancee tant que l'erreur est transitoire.

    Raises:
        RateLimitError: 429 persistant apres max_attempts tentatives
        httpx.TransportError: reseau toujours indisponible
        httpx.HTTPStatusError: toute autre erreur HTTP (sans relance)
    """
    @with_retry(max_attempts=max_attempts)
    async def _attempt() -> httpx.Response:
        return _check_response(await client.request(method, url, **kwargs))

    return await _attempt()
