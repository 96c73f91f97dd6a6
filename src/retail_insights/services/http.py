"""
HTTP sessions for hosted data sources.

``create_session`` returns a ``requests.Session`` whose adapters retry
transient read failures (429, 502/503/504, connection resets) and fall back
to ``DEFAULT_TIMEOUT`` when a request has no explicit timeout. Gateways build
one session each and pass their own headers (API keys, auth tokens)::

    from retail_insights.services.http import create_session

    s = create_session(headers={"apikey": key})
    resp = s.get(f"{base_url}/rest/v1/sales", params=params)
    resp.raise_for_status()

Retries and timeouts are sized so a failing upstream surfaces within the
analysis timeout (``Settings.analysis_timeout_seconds``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from retail_insights import __version__

if TYPE_CHECKING:
    from collections.abc import Mapping

#: Reads only; 0s, 0.5s, 1s between the three retries.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=0.5,
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD"],
    raise_on_status=False,  # let resp.raise_for_status() handle it
)

DEFAULT_TIMEOUT = 10  # seconds

USER_AGENT = f"retail-insights/{__version__}"


class TimeoutHTTPAdapter(HTTPAdapter):
    """Retrying adapter that applies a default timeout to every request."""

    def __init__(self, *args: Any, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    headers: Mapping[str, str] | None = None,
) -> requests.Session:
    """
    Build a JSON API session with retry and default timeout.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Timeout used when a request doesn't pass one.
        headers: Extra headers sent with every request.
    """
    s = requests.Session()
    adapter = TimeoutHTTPAdapter(max_retries=retry or DEFAULT_RETRY, timeout=timeout)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
    if headers:
        s.headers.update(headers)
    return s
