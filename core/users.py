# =============================================================================
# core/users.py  -  Users, Teams & Roles
# =============================================================================
#
# Everything under /api/catalog/v1/users and /api/catalog/v1/teams.
#
# NOTE ON BOOLEAN FILTERS:
#   Socrata's users endpoint expects "t"/"f", not "true"/"false".  None means
#   "don't filter" and is left out of the query string entirely.
# =============================================================================

from typing import Any, Optional

from core.models import TeamQuery, UserQuery
from core.socrata import SocrataClient


def _flag(value: Optional[bool]) -> Optional[str]:
    if value is None:
        return None
    return "t" if value else "f"


def _joined(values: list[str]) -> Optional[str]:
    return ",".join(values) or None


def search_users(client: SocrataClient, domain: str, query: UserQuery) -> Any:
    params = {
        "domain": domain,
        "ids": _joined(query.ids),
        "emails": _joined(query.emails),
        "roles": _joined(query.roles),
        "disabled": _flag(query.disabled),
        "future": _flag(query.future),
        "limit": query.limit,
        "offset": query.offset,
    }
    return client.get(client.url(domain, "/api/catalog/v1/users", params))


def search_teams(client: SocrataClient, domain: str, query: TeamQuery) -> Any:
    params = {
        "domain": domain,
        "ids": _joined(query.ids),
        "names": _joined(query.names),
        "limit": query.limit,
        "offset": query.offset,
    }
    return client.get(client.url(domain, "/api/catalog/v1/teams", params))


def roles_url(client: SocrataClient, domain: str, user_id: str) -> str:
    return client.url(domain, f"/api/catalog/v1/users/{user_id}/roles")


def get_user_roles(client: SocrataClient, domain: str, user_id: str) -> Any:
    return client.get(roles_url(client, domain, user_id))


def update_user_roles(
    client: SocrataClient,
    domain: str,
    user_id: str,
    roles: list[str],
) -> Any:
    """Replace a user's roles with exactly `roles` (no merge)."""
    return client.put(roles_url(client, domain, user_id), {"roles": list(roles)})
