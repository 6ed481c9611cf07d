"""Download JSON documents such as a hosted ingredient dictionary."""

from typing import Any

import requests

from .retry import retry_transient_errors

USER_AGENT = "clarivana-utils/0.1"


@retry_transient_errors(max_attempts=3, initial_delay=1.0)
def fetch_json(url: str, timeout: float = 10.0) -> Any:
    """GET ``url`` and decode the JSON body.

    Args:
        url: Address of the JSON document.
        timeout: Per-request timeout in seconds.

    Returns:
        The decoded JSON value.

    Raises:
        requests.HTTPError: The server answered with an error status. 429, 500, 502,
            503 and 504 answers are retried first; others fail at once.
        ValueError: The body is not valid JSON.
    """
    response = requests.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    response.raise_for_status()
    return response.json()
