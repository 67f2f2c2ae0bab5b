# =============================================================================
# core/socrata.py  -  Remote Call Adapter for the Socrata REST API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One small client that knows how to talk HTTP+JSON to a Socrata portal:
#     - builds https://{domain}/... URLs (after the domain guard says yes)
#     - attaches the fixed header set (+ Basic auth when configured)
#     - turns non-2xx answers into RemoteError(status, statusText, body)
#
# WHAT IT DELIBERATELY DOES NOT DO:
#   No retries, no backoff, no caching.  One call = one attempt.  Network
#   failures (DNS, connection reset) surface as the urllib error itself.
#
# TESTING:
#   The client takes its `urlopen` callable as a constructor argument, so
#   tests hand in a fake and no socket is ever opened.
# =============================================================================

import base64
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Callable, Mapping, Optional

from core.config import DomainGuard, SocrataConfig
from core.errors import RemoteError

logger = logging.getLogger(__name__)


def auth_headers(config: SocrataConfig) -> dict[str, str]:
    """Headers sent with every request."""
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if config.has_credentials:
        token = f"{config.app_id}:{config.app_secret}".encode()
        headers["Authorization"] = f"Basic {base64.b64encode(token).decode()}"
    return headers


class SocrataClient:
    """Thin GET/PUT/POST wrapper with the domain guard built in."""

    def __init__(
        self,
        config: SocrataConfig,
        urlopen: Callable[..., Any] = urllib.request.urlopen,
    ) -> None:
        self.config = config
        self.guard = DomainGuard(config.allowed_domains)
        self._urlopen = urlopen

    # -------------------------------------------------------------------------
    # URL building
    # -------------------------------------------------------------------------
    def url(
        self,
        domain: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Validate `domain` and build https://{domain}{path}?{params}.

        Params whose value is None are left out; everything else is
        urlencoded in the order given.
        """
        self.guard.validate(domain)
        url = f"https://{domain}{path}"
        if params:
            query = urllib.parse.urlencode(
                [(key, value) for key, value in params.items() if value is not None]
            )
            if query:
                url = f"{url}?{query}"
        return url

    # -------------------------------------------------------------------------
    # HTTP verbs
    # -------------------------------------------------------------------------
    def get(self, url: str) -> Any:
        return self._request("GET", url)

    def put(self, url: str, body: Any) -> Any:
        return self._request("PUT", url, body)

    def post(self, url: str, body: Any) -> Any:
        return self._request("POST", url, body)

    def _request(self, method: str, url: str, body: Any = None) -> Any:
        data = json.dumps(body).encode("utf-8") if body is not None else None
        req = urllib.request.Request(
            url,
            data=data,
            headers=auth_headers(self.config),
            method=method,
        )
        logger.debug("%s %s", method, url)

        try:
            with self._urlopen(req, timeout=self.config.timeout) as response:
                raw = response.read()
        except urllib.error.HTTPError as exc:
            # HTTPError is both an exception and a response: read its body
            # so the agent sees Socrata's own explanation.
            error_body = exc.read().decode("utf-8", errors="replace") if exc.fp else ""
            raise RemoteError(exc.code, exc.reason or "", error_body) from exc

        if not raw:
            return None
        return json.loads(raw.decode("utf-8"))
