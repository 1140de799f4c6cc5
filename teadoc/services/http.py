"""
Shared HTTP plumbing for the remote clients.

GETs are retried with exponential backoff through urllib3's Retry;
POSTs are never retried.
"""
from typing import Any, Dict, Optional
import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from teadoc.core.config import get_settings
from teadoc.core.errors import MalformedResponse, ServiceUnavailable

logger = logging.getLogger(__name__)

RETRY_STATUSES = (429, 500, 502, 503, 504)


def build_session(retries: Optional[int] = None, backoff: Optional[float] = None) -> requests.Session:
    """Create a requests.Session with bounded retry on idempotent calls."""
    settings = get_settings()
    retry = Retry(
        total=settings.HTTP_RETRIES if retries is None else retries,
        backoff_factor=settings.HTTP_BACKOFF if backoff is None else backoff,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
        # Server-sent Retry-After could stall the page past HTTP_TIMEOUT
        respect_retry_after_header=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def request_json(
    session: Any,
    method: str,
    url: str,
    timeout: float,
    **kwargs,
) -> Dict[str, Any]:
    """
    Perform a request and return the decoded JSON body.

    Raises:
        ServiceUnavailable: connection error, timeout or non-2xx status
        MalformedResponse: body is not a JSON object
    """
    logger.info(f"{method} {url}")
    try:
        res = session.request(method, url, timeout=timeout, **kwargs)
    except requests.exceptions.Timeout as e:
        logger.warning(f"{method} {url} timed out after {timeout}s")
        raise ServiceUnavailable(f"Request timed out: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.warning(f"{method} {url} failed: {e}")
        raise ServiceUnavailable(f"Could not reach {url}: {e}") from e

    if not 200 <= res.status_code < 300:
        logger.warning(f"{method} {url} returned {res.status_code}")
        raise ServiceUnavailable(
            f"Error {res.status_code}: {(res.text or '')[:500]}",
            status_code=res.status_code,
        )

    try:
        body = res.json()
    except ValueError as e:
        logger.error(f"{method} {url} returned a non-JSON body")
        raise MalformedResponse("Response body is not valid JSON", status_code=res.status_code) from e

    if not isinstance(body, dict):
        logger.error(f"{method} {url} returned {type(body).__name__}, expected an object")
        raise MalformedResponse("Response body is not a JSON object", status_code=res.status_code)

    return body
