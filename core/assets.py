# =============================================================================
# core/assets.py  -  Asset Metadata & Permissions (the Merge Engine)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads and updates two kinds of per-asset documents:
#     - metadata     /api/views/{id}.json
#     - permissions  /api/assets/{id}/permissions.json
#
# READ-MODIFY-WRITE:
#   Socrata's PUT replaces the whole document, but agents want to say
#   "just change the description".  So every update is:
#
#     1. GET the current document      (fail fast: no PUT if this fails)
#     2. MERGE the patch into a copy   (pure functions below, easy to test)
#     3. PUT the merged document back
#
#   The merge lives only in memory.  If the PUT fails nothing was written,
#   and two agents updating the same asset at once are not coordinated:
#   whatever concurrency control Socrata has is what applies.
#
# THE SEPARATION OF "MERGE" AND "FETCH":
#   merge_metadata / merge_grants / merge_permissions never do I/O.  The
#   update_* functions compose them with the client.
# =============================================================================

import copy
import logging
from typing import Any, Optional

from core.models import MetadataPatch, PermissionPatch, ResourceIdentifier, UserGrant
from core.socrata import SocrataClient

logger = logging.getLogger(__name__)


def metadata_url(client: SocrataClient, ident: ResourceIdentifier) -> str:
    return client.url(ident.domain, f"/api/views/{ident.asset_id}.json")


def permissions_url(client: SocrataClient, ident: ResourceIdentifier) -> str:
    return client.url(ident.domain, f"/api/assets/{ident.asset_id}/permissions.json")


# =============================================================================
# PURE MERGE LOGIC
# =============================================================================
def merge_metadata(current: dict[str, Any], patch: MetadataPatch) -> dict[str, Any]:
    """Shallow copy of `current` with every supplied patch field overwritten.

    Fields the patch does not mention keep their current value; nothing is
    ever nulled out by omission.
    """
    merged = dict(current or {})
    merged.update(patch.present_fields())
    return merged


def _same_grantee(grant: dict[str, Any], incoming: dict[str, Any]) -> bool:
    # ids win when both sides carry one; emails are only compared otherwise.
    if grant.get("id") and incoming.get("id"):
        return grant["id"] == incoming["id"]
    if grant.get("email") and incoming.get("email"):
        return grant["email"] == incoming["email"]
    return False


def _find_grant(existing: list[dict[str, Any]], incoming: dict[str, Any]) -> Optional[int]:
    """Index of the first grant in `existing` that `incoming` refers to."""
    for index, grant in enumerate(existing):
        if isinstance(grant, dict) and _same_grantee(grant, incoming):
            return index
    return None


def merge_grants(
    existing: list[dict[str, Any]],
    incoming: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Upsert each incoming grant into the existing list.

    A match (by id, else by email; first match wins against the ORIGINAL
    list) is shallow-merged in place so it keeps its position.  Anything
    unmatched is appended.  O(existing x incoming), fine for tens of users.
    """
    original = list(existing or [])
    merged = [dict(grant) if isinstance(grant, dict) else grant for grant in original]

    for grant in incoming:
        index = _find_grant(original, grant)
        if index is None:
            merged.append(dict(grant))
        else:
            merged[index] = {**merged[index], **grant}
    return merged


def merge_permissions(current: dict[str, Any], patch: PermissionPatch) -> dict[str, Any]:
    """Apply a PermissionPatch to a permissions document (no I/O)."""
    merged = dict(current or {})

    if patch.scope:
        merged["scope"] = patch.scope

    if patch.users is not None:
        incoming = [grant.to_payload() for grant in patch.users]
        if patch.replace_users:
            # An empty list here revokes every grant.
            merged["users"] = incoming
        else:
            merged["users"] = merge_grants(merged.get("users") or [], incoming)

    return merged


# =============================================================================
# REMOTE OPERATIONS
# =============================================================================
def get_metadata(client: SocrataClient, ident: ResourceIdentifier) -> Any:
    return client.get(metadata_url(client, ident))


def get_permissions(client: SocrataClient, ident: ResourceIdentifier) -> Any:
    return client.get(permissions_url(client, ident))


def update_metadata(
    client: SocrataClient,
    ident: ResourceIdentifier,
    patch: MetadataPatch,
) -> Any:
    """GET -> merge -> PUT for asset metadata.  Returns Socrata's PUT response."""
    url = metadata_url(client, ident)
    current = client.get(url)
    merged = merge_metadata(current, patch)
    logger.info(
        "Updating metadata for %s on %s: %s",
        ident.asset_id, ident.domain, ", ".join(patch.present_fields()) or "no fields",
    )
    return client.put(url, merged)


def update_permissions(
    client: SocrataClient,
    ident: ResourceIdentifier,
    patch: PermissionPatch,
) -> Any:
    """GET -> merge -> PUT for asset permissions.  Returns Socrata's PUT response."""
    url = permissions_url(client, ident)
    current = client.get(url)
    merged = merge_permissions(copy.deepcopy(current or {}), patch)
    logger.info(
        "Updating permissions for %s on %s (scope=%s, users=%s, replace=%s)",
        ident.asset_id,
        ident.domain,
        patch.scope or "unchanged",
        len(patch.users) if patch.users is not None else "unchanged",
        patch.replace_users,
    )
    return client.put(url, merged)
