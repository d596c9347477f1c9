"""GET transport for API-Football with bounded retries.

One loop owns the retry policy: timeouts, connection errors and the statuses
in ``RETRY_STATUS_CODES`` are retried with urllib3's exponential backoff, any
other HTTP error is raised on the first response. ``attempts`` counts every
request made, including the first.
"""
from __future__ import annotations

import time
from functools import lru_cache
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

import requests
from urllib3.util.retry import Retry

from .config import API_BACKOFF_FACTOR, API_MAX_RETRIES, API_TIMEOUT, RETRY_STATUS_CODES, setup_logger

logger = setup_logger(__name__)


def scrub_url(url: str) -> str:
    """Drop the query string so searched names and ids stay out of the logs."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


@lru_cache(maxsize=1)
def default_session() -> requests.Session:
    return requests.Session()


def retry_policy(attempts: int, backoff_factor: float = API_BACKOFF_FACTOR) -> Retry:
    retries = max(1, int(attempts)) - 1
    return Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUS_CODES,
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )


def get_with_retries(
    url: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    attempts: int = API_MAX_RETRIES,
    timeout: float = API_TIMEOUT,
    backoff_factor: float = API_BACKOFF_FACTOR,
    session: Optional[Any] = None,
) -> requests.Response:
    """GET ``url`` and return the first successful response.

    Raises the last ``requests`` exception once attempts run out. A
    non-retryable status raises ``HTTPError`` straight away.
    """

    http = session or default_session()
    attempts = max(1, int(attempts))
    policy = retry_policy(attempts, backoff_factor)
    target = scrub_url(url)

    for attempt in range(1, attempts + 1):
        try:
            response = http.request("GET", url, params=params, headers=headers, timeout=timeout)
        except (requests.Timeout, requests.ConnectionError) as exc:
            error: requests.RequestException = exc
        else:
            if not policy.is_retry("GET", response.status_code):
                response.raise_for_status()
                return response
            error = requests.HTTPError(f"{response.status_code} {response.reason}", response=response)

        if attempt == attempts:
            if attempts > 1:
                logger.warning(
                    "api_football_gave_up url=%s attempts=%d err=%s",
                    target,
                    attempts,
                    type(error).__name__,
                )
            raise error

        policy = policy.increment(method="GET", url=target, error=error)
        delay = policy.get_backoff_time()
        logger.info(
            "api_football_retry url=%s attempt=%d/%d delay=%.2fs err=%s",
            target,
            attempt,
            attempts,
            delay,
            type(error).__name__,
        )
        if delay > 0:
            time.sleep(delay)

    raise RuntimeError("get_with_retries made no request")
