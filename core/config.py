# =============================================================================
# core/config.py  -  Process Configuration & Domain Guard
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the gateway's settings ONCE (at process start) into an immutable
#   SocrataConfig, and provides the DomainGuard that every core function
#   consults before it builds a URL.
#
# ENVIRONMENT VARIABLES:
#   SOCRATA_DOMAIN   Comma-separated allowlist ("data.a.gov,data.b.gov").
#                    Empty or unset means every domain is allowed.
#   SOCRATA_ID       App token id     } Basic auth is only sent when
#   SOCRATA_SECRET   App token secret } BOTH are present.
#   SOCRATA_TIMEOUT  Seconds before a single HTTP call gives up (default 30).
#
# Business logic never touches os.environ.  Tests build a SocrataConfig by
# hand and pass it in.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import DomainNotAllowed

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class SocrataConfig:
    """Immutable settings shared by the domain guard and the HTTP client."""

    allowed_domains: tuple[str, ...] = ()
    app_id: Optional[str] = None
    app_secret: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def has_credentials(self) -> bool:
        return bool(self.app_id and self.app_secret)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SocrataConfig":
        """Build a config from environment variables (os.environ by default)."""
        env = os.environ if environ is None else environ

        raw_domains = env.get("SOCRATA_DOMAIN", "")
        allowed = tuple(d.strip() for d in raw_domains.split(",") if d.strip())

        raw_timeout = env.get("SOCRATA_TIMEOUT", "").strip()
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT

        return cls(
            allowed_domains=allowed,
            app_id=env.get("SOCRATA_ID") or None,
            app_secret=env.get("SOCRATA_SECRET") or None,
            timeout=timeout,
        )


class DomainGuard:
    """Exact-match hostname allowlist.

    No lowercasing, no wildcard or suffix matching: "Data.City.gov" and
    "data.city.gov" are different domains as far as the guard is concerned.
    """

    def __init__(self, allowed_domains: tuple[str, ...] = ()) -> None:
        self.allowed_domains = tuple(allowed_domains)

    def validate(self, domain: str) -> None:
        if self.allowed_domains and domain not in self.allowed_domains:
            raise DomainNotAllowed(domain, self.allowed_domains)
