# =============================================================================
# core/errors.py  -  Error Taxonomy
# =============================================================================
#
# Every failure the gateway can explain gets its own exception class here.
# The tool layer (tools/mcp_server.py) catches these, adds the operation
# name and an actionable hint, and hands a single message back to the agent.
#
# Transport failures (DNS, refused connections) are NOT wrapped: they come
# through as the urllib/OSError that caused them.
# =============================================================================


class SocrataError(Exception):
    """Base class for errors raised by the gateway's core logic."""


class DomainNotAllowed(SocrataError):
    """The target domain is not in the configured allowlist."""

    def __init__(self, domain: str, allowed: tuple[str, ...]):
        self.domain = domain
        self.allowed = tuple(allowed)
        super().__init__(
            f'Domain "{domain}" is not in the allowlist. '
            f"Allowed domains: {', '.join(self.allowed)}"
        )


class RemoteError(SocrataError):
    """The Socrata API answered with a non-success status code."""

    def __init__(self, status: int, status_text: str, body: str):
        self.status = status
        self.status_text = status_text
        self.body = body
        super().__init__(f"Socrata API error ({status}): {status_text} - {body}")


class InvalidArguments(SocrataError, ValueError):
    """A tool precondition was violated before any remote call."""


class NotFound(SocrataError, LookupError):
    """A dependent lookup (usually a catalog search) found nothing usable."""
