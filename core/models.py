# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the gateway)
# =============================================================================
#
# These dataclasses describe the request-scoped data that flows between the
# tool layer and the core.  Nothing here is ever persisted: each object lives
# for exactly one tool invocation.
#
# REMOTE DOCUMENTS STAY DICTS:
#   Metadata and permission documents belong to Socrata, and Socrata adds
#   fields whenever it likes.  We keep them as plain (insertion-ordered)
#   dicts and only model the PATCHES we send, so an unknown remote field is
#   always carried through a read-modify-write untouched.
#
# DESIGN PRINCIPLE - "Absent is not empty":
#   Every optional patch field uses None for "not supplied".  An empty list
#   or empty string is a real value and WILL be written.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

Scope = Literal["private", "public", "site"]
OutputFormat = Literal["json", "markdown"]
DetailLevel = Literal["concise", "detailed"]


# -----------------------------------------------------------------------------
# ResourceIdentifier - which asset on which portal
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ResourceIdentifier:
    """A (domain, asset id) pair.  The asset id is opaque; we never parse it."""

    domain: str                        # "data.cityofchicago.org"
    asset_id: str                      # "xzkq-xp2w" (the 4x4 id)


# -----------------------------------------------------------------------------
# MetadataPatch - sparse update for /api/views/{id}.json
# -----------------------------------------------------------------------------
@dataclass
class MetadataPatch:
    """Fields the caller wants to change on an asset's metadata."""

    name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[list[str]] = None
    category: Optional[str] = None
    attribution: Optional[str] = None
    license: Optional[str] = None

    def present_fields(self) -> dict[str, Any]:
        """Supplied fields only, in declaration order."""
        return {
            key: value
            for key, value in (
                ("name", self.name),
                ("description", self.description),
                ("tags", self.tags),
                ("category", self.category),
                ("attribution", self.attribution),
                ("license", self.license),
            )
            if value is not None
        }


# -----------------------------------------------------------------------------
# UserGrant - one entry in a permission document's "users" list
# -----------------------------------------------------------------------------
@dataclass
class AccessLevel:
    name: str                          # "viewer", "contributor", "current_owner"
    version: str = "all"


@dataclass
class UserGrant:
    """Access granted to one registered user (id) or invitee (email).

    Matching rule used by the merge engine: by id when both grants carry
    one, otherwise by email.  A grant with neither is always new.
    """

    id: Optional[str] = None
    email: Optional[str] = None
    access_levels: list[AccessLevel] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """The remote (camelCase) shape, without keys that were not supplied."""
        payload: dict[str, Any] = {}
        if self.id is not None:
            payload["id"] = self.id
        if self.email is not None:
            payload["email"] = self.email
        payload["accessLevels"] = [
            {"name": level.name, "version": level.version}
            for level in self.access_levels
        ]
        return payload


@dataclass
class PermissionPatch:
    """Sparse update for /api/assets/{id}/permissions.json."""

    scope: Optional[Scope] = None
    users: Optional[list[UserGrant]] = None
    replace_users: bool = False        # True = users list is replaced wholesale


# -----------------------------------------------------------------------------
# ScheduleSummary - what the schedule resolver hands back per dataset
# -----------------------------------------------------------------------------
@dataclass
class ScheduleSummary:
    """Publishing schedule of one dataset, pre-digested for the agent."""

    dataset: dict[str, Any]            # {"name": ..., "fxf": ...}
    schedule: Optional[dict[str, Any]] = None
    summary: Optional[str] = None      # "Updates daily, last updated: ..."
    error: Optional[str] = None        # Set when this one dataset failed

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"dataset": self.dataset, "schedule": self.schedule}
        if self.summary is not None:
            result["summary"] = self.summary
        if self.error is not None:
            result["error"] = self.error
        return result


@dataclass(frozen=True)
class FormatOptions:
    """How the caller wants the result rendered."""

    format: OutputFormat = "json"
    detail: DetailLevel = "detailed"


# -----------------------------------------------------------------------------
# Query objects for the list/search endpoints
# -----------------------------------------------------------------------------
@dataclass
class CatalogQuery:
    q: Optional[str] = None
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    attribution: Optional[str] = None
    provenance: Optional[str] = None
    visibility: Optional[str] = None   # "open" | "private" | "internal"
    order: str = "relevance"
    limit: int = 20
    offset: int = 0


@dataclass
class UserQuery:
    ids: list[str] = field(default_factory=list)
    emails: list[str] = field(default_factory=list)
    roles: list[str] = field(default_factory=list)
    disabled: Optional[bool] = None
    future: Optional[bool] = None
    limit: int = 100
    offset: int = 0


@dataclass
class TeamQuery:
    ids: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    limit: int = 100
    offset: int = 0


@dataclass
class ActivityQuery:
    limit: int = 100
    offset: int = 0
    start_date: Optional[str] = None   # ISO date, e.g. "2023-01-01"
    end_date: Optional[str] = None
    activity_type: Optional[str] = None  # "create", "update", "delete", ...


def normalize_list(value: Union[list[str], str, None]) -> list[str]:
    """Turn "a, b" or ["a", "b"] (or None) into ["a", "b"].

    Agents send list filters either way; the core only ever sees lists.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)
    return [item.strip() for item in items if item and item.strip()]
