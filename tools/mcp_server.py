# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every MCP tool the agent can call against a Socrata open-data
#   portal.  Each tool is a thin wrapper around a core/ function: it turns
#   validated input into core objects, calls core/, and renders the result
#   as JSON or markdown text.
#
# HOW IT WORKS (the flow):
#   1. The agent calls a tool by name (e.g., "socrata_update_permissions")
#   2. FastMCP validates the arguments against the function signature
#      (Literal enums, Field bounds, nested pydantic models)
#   3. The function calls core/ (domain guard -> HTTP -> merge/resolve)
#   4. core/formatting.py projects, bounds and serializes the result
#   5. The agent receives one text payload, or one error message
#
# TOOL NAMING CONVENTIONS:
#   - socrata_get_*     -> Read-only retrieval (idempotent, safe to retry)
#   - socrata_search_*  -> Query with filters (idempotent, safe to retry)
#   - socrata_update_*  -> Writes.  Annotated readOnlyHint=False so the
#                          calling agent can ask for confirmation first.
#
# ERROR CONTRACT:
#   Every tool catches failures from core/ and raises ONE ToolError whose
#   message names the operation, the identifiers involved, the underlying
#   reason, and a hint about what to try next.
#
# RUNNING THIS SERVER:
#   a) Standalone:   python -m tools.mcp_server   (or: socrata-mcp)
#   b) From the demo agent via stdio transport (agent/steward_agent.py)
# =============================================================================

import logging
import os
import sys
from typing import Annotated, Any, Literal, Optional, Union

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations
from pydantic import BaseModel, ConfigDict, Field

from core import activity, assets, catalog, publishing, users, workflows
from core.config import SocrataConfig
from core.formatting import markdown_document, page_number, shape
from core.models import (
    AccessLevel,
    ActivityQuery,
    CatalogQuery,
    FormatOptions,
    MetadataPatch,
    PermissionPatch,
    ResourceIdentifier,
    TeamQuery,
    UserGrant,
    UserQuery,
    normalize_list,
)
from core.socrata import SocrataClient

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to the agent over STDOUT.
# A stray log line on stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status messages
#     - RED for failures handed back to the agent
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

_PREVIEW_CHARS = 300

# .env has to be loaded before basicConfig reads LOG_LEVEL.
load_dotenv()

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger("socrata_mcp")


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its (non-empty) parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the size and the start of a response in GREEN, then return it."""
    preview = text[:_PREVIEW_CHARS].replace("\n", " ")
    if len(text) > _PREVIEW_CHARS:
        preview += " ..."
    logger.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {preview}{_RESET}")
    return text


def _fail(tool_name: str, what: str, exc: Exception, hint: str) -> ToolError:
    """Build the single error message an agent sees for a failed tool call."""
    message = f"Failed to {what}: {exc}. {hint}"
    logger.error(f"{_RED}  ✗ {tool_name}: {message}{_RESET}")
    return ToolError(message)


# =============================================================================
# The Socrata client
# =============================================================================
# Built once, from the environment, the first time a tool needs it.  Tests
# (and embedders) call configure() with their own client instead.
# =============================================================================
_client: Optional[SocrataClient] = None


def configure(client: SocrataClient) -> None:
    """Install the client every tool uses."""
    global _client
    _client = client


def get_client() -> SocrataClient:
    global _client
    if _client is None:
        config = SocrataConfig.from_env()
        _log_status(
            "Socrata client configured: "
            f"allowlist={', '.join(config.allowed_domains) or 'all domains'}, "
            f"auth={'basic' if config.has_credentials else 'anonymous'}"
        )
        _client = SocrataClient(config)
    return _client


def _render(
    data: Any,
    fmt: str,
    detail: str,
    title: str,
    facts: list[tuple[str, Any]],
    summary: Optional[str] = None,
) -> str:
    """Shape `data` and, for markdown, wrap it in a titled document."""
    body = shape(data, FormatOptions(format=fmt, detail=detail))
    if fmt == "markdown":
        return markdown_document(title, facts, body, summary)
    return body


def _count(data: Any) -> Any:
    return len(data) if isinstance(data, list) else "Unknown"


def _field(data: Any, key: str, default: Any) -> Any:
    if isinstance(data, dict):
        return data.get(key) or default
    return default


# =============================================================================
# Shared argument types
# =============================================================================
# Annotated aliases keep every tool's signature short while still giving the
# agent a description for each parameter in the generated JSON schema.
# =============================================================================
Domain = Annotated[str, Field(description='Socrata domain (e.g., "data.cityofchicago.org")')]
AssetId = Annotated[
    str,
    Field(description='Asset ID (4x4 identifier like "xzkq-xp2w") - found in dataset URLs'),
]
Format = Annotated[Literal["json", "markdown"], Field(description="Response format")]
Detail = Annotated[
    Literal["concise", "detailed"],
    Field(description="Level of detail in response ('concise' trims list items to id/name/title/description/domain)"),
]
StringList = Union[list[str], str, None]
Offset = Annotated[int, Field(ge=0, description="Offset for pagination")]

READ_ONLY = ToolAnnotations(
    readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True
)
IDEMPOTENT_WRITE = ToolAnnotations(
    readOnlyHint=False, destructiveHint=False, idempotentHint=True, openWorldHint=True
)
NON_IDEMPOTENT_WRITE = ToolAnnotations(
    readOnlyHint=False, destructiveHint=False, idempotentHint=False, openWorldHint=True
)


class AccessLevelInput(BaseModel):
    name: str = Field(description='Access level name (e.g., "current_owner", "contributor", "viewer")')
    version: str = Field(default="all", description='Version (typically "all")')


class UserPermissionInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, description="User ID for registered users")
    email: Optional[str] = Field(default=None, description="Email address for unregistered users")
    access_levels: list[AccessLevelInput] = Field(
        alias="accessLevels",
        description="Array of access levels for this user",
    )

    def to_grant(self) -> UserGrant:
        return UserGrant(
            id=self.id,
            email=self.email,
            access_levels=[AccessLevel(name=a.name, version=a.version) for a in self.access_levels],
        )


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("socrata-open-data")


# =============================================================================
# CATALOG AND DISCOVERY TOOLS
# =============================================================================
@mcp.tool(name="socrata_get_catalog", annotations=READ_ONLY)
def get_catalog(
    domain: Domain,
    type: Annotated[
        Literal["dataset", "filter", "file"],
        Field(description="Type of resources to find"),
    ],
    category: Annotated[
        Optional[str],
        Field(description='Optional category filter (e.g., "Transportation", "Public Safety")'),
    ] = None,
    format: Format = "json",
    detail: Detail = "detailed",
) -> str:
    """Discover datasets on a Socrata domain by type and category.

    WHEN TO CALL THIS: For the first look at a portal you know nothing
    about.  Use socrata_search_catalog when you have keywords or filters.
    """
    _log_request("socrata_get_catalog", domain=domain, type=type, category=category)
    try:
        response = catalog.get_catalog(get_client(), domain, type, category)
    except Exception as exc:
        raise _fail(
            "socrata_get_catalog", f"get catalog from {domain}", exc,
            "Try checking if the domain is accessible or adjust your filters.",
        ) from exc

    _log_status(f"Catalog returned {_field(response, 'resultSetSize', 0)} results")
    return _log_response("socrata_get_catalog", _render(
        response, format, detail, "Catalog Results",
        [
            ("Domain", domain),
            ("Type", type),
            ("Category", category or "All"),
            ("Results", _field(response, "resultSetSize", 0)),
        ],
    ))


@mcp.tool(name="socrata_search_catalog", annotations=READ_ONLY)
def search_catalog(
    domain: Domain,
    q: Annotated[
        Optional[str],
        Field(description="Search query keywords (searches titles, descriptions, column names)"),
    ] = None,
    categories: Annotated[
        Optional[list[str]],
        Field(description='Categories to filter by (e.g., ["Transportation", "Public Safety"])'),
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        Field(description='Tags to filter by (e.g., ["crime", "traffic"])'),
    ] = None,
    attribution: Annotated[Optional[str], Field(description="Data provider/organization filter")] = None,
    provenance: Annotated[Optional[str], Field(description="Data source provenance filter")] = None,
    visibility: Annotated[
        Optional[Literal["open", "private", "internal"]],
        Field(description="Dataset visibility level"),
    ] = None,
    order: Annotated[
        Literal["relevance", "name", "createdAt", "updatedAt", "page_views_last_month"],
        Field(description="Sort order for results"),
    ] = "relevance",
    limit: Annotated[int, Field(ge=1, le=100, description="Number of results to return (1-100)")] = 20,
    offset: Offset = 0,
    format: Format = "json",
    detail: Detail = "detailed",
) -> str:
    """Search datasets across a Socrata domain with advanced filters.

    Use this when you need to find specific datasets by keywords, tags,
    attribution, or other criteria.  Page with limit/offset.
    """
    _log_request("socrata_search_catalog", domain=domain, q=q, categories=categories,
                 tags=tags, attribution=attribution, provenance=provenance,
                 visibility=visibility, order=order, limit=limit, offset=offset)
    query = CatalogQuery(
        q=q,
        categories=normalize_list(categories),
        tags=normalize_list(tags),
        attribution=attribution,
        provenance=provenance,
        visibility=visibility,
        order=order,
        limit=limit,
        offset=offset,
    )
    try:
        response = catalog.search_catalog(get_client(), domain, query)
    except Exception as exc:
        raise _fail(
            "socrata_search_catalog", f"search catalog on {domain}", exc,
            "Try simplifying your search terms or checking the domain accessibility.",
        ) from exc

    return _log_response("socrata_search_catalog", _render(
        response, format, detail, "Dataset Search Results",
        [
            ("Domain", domain),
            ("Query", q or "None"),
            ("Results", _field(response, "resultSetSize", 0)),
            ("Page", page_number(offset, limit)),
        ],
    ))


# =============================================================================
# USER AND TEAM MANAGEMENT TOOLS
# =============================================================================
@mcp.tool(name="socrata_search_users", annotations=READ_ONLY)
def search_users(
    domain: Domain,
    ids: Annotated[StringList, Field(description="Specific user IDs to look up (array or comma-separated)")] = None,
    emails: Annotated[StringList, Field(description="Email addresses to search for (array or comma-separated)")] = None,
    roles: Annotated[StringList, Field(description='Filter by user roles (e.g., ["administrator", "editor"])')] = None,
    disabled: Annotated[
        Optional[bool],
        Field(description="Filter by account status - true for disabled users, false for active"),
    ] = None,
    future: Annotated[Optional[bool], Field(description="Include future/pending users in results")] = None,
    limit: Annotated[int, Field(ge=1, le=1000, description="Maximum results to return (1-1000)")] = 100,
    offset: Offset = 0,
    format: Format = "json",
    detail: Detail = "detailed",
) -> str:
    """Find users within a Socrata domain by various criteria.

    Use this to discover collaborators, check user status, or find the
    user ID you need before changing roles or permissions.
    """
    _log_request("socrata_search_users", domain=domain, ids=ids, emails=emails, roles=roles,
                 disabled=disabled, future=future, limit=limit, offset=offset)
    query = UserQuery(
        ids=normalize_list(ids),
        emails=normalize_list(emails),
        roles=normalize_list(roles),
        disabled=disabled,
        future=future,
        limit=limit,
        offset=offset,
    )
    try:
        found = users.search_users(get_client(), domain, query)
    except Exception as exc:
        raise _fail(
            "socrata_search_users", f"search users on {domain}", exc,
            "Try adjusting your search criteria or checking domain access permissions.",
        ) from exc

    return _log_response("socrata_search_users", _render(
        found, format, detail, "User Search Results",
        [("Domain", domain), ("Users Found", _count(found)), ("Page", page_number(offset, limit))],
    ))


@mcp.tool(name="socrata_search_teams", annotations=READ_ONLY)
def search_teams(
    domain: Domain,
    ids: Annotated[StringList, Field(description="Specific team IDs to look up (array or comma-separated)")] = None,
    names: Annotated[StringList, Field(description="Team names to search for (partial matches supported)")] = None,
    limit: Annotated[int, Field(ge=1, le=1000, description="Maximum results to return (1-1000)")] = 100,
    offset: Offset = 0,
    format: Format = "json",
    detail: Detail = "detailed",
) -> str:
    """Find teams within a Socrata domain by ID or name."""
    _log_request("socrata_search_teams", domain=domain, ids=ids, names=names,
                 limit=limit, offset=offset)
    query = TeamQuery(ids=normalize_list(ids), names=normalize_list(names), limit=limit, offset=offset)
    try:
        found = users.search_teams(get_client(), domain, query)
    except Exception as exc:
        raise _fail(
            "socrata_search_teams", f"search teams on {domain}", exc,
            "Try adjusting your search criteria or checking domain access permissions.",
        ) from exc

    return _log_response("socrata_search_teams", _render(
        found, format, detail, "Team Search Results",
        [("Domain", domain), ("Teams Found", _count(found)), ("Page", page_number(offset, limit))],
    ))


@mcp.tool(name="socrata_get_user_roles", annotations=READ_ONLY)
def get_user_roles(
    domain: Domain,
    userId: Annotated[str, Field(description="User ID to check roles for")],
    format: Format = "json",
    detail: Detail = "detailed",
) -> str:
    """Check what roles a user has within a Socrata domain.

    WHEN TO CALL THIS: Before socrata_update_user_roles, which replaces the
    whole role list.
    """
    _log_request("socrata_get_user_roles", domain=domain, userId=userId)
    try:
        roles = users.get_user_roles(get_client(), domain, userId)
    except Exception as exc:
        raise _fail(
            "socrata_get_user_roles", f"get roles for user {userId} on {domain}", exc,
            "Check if the user exists and you have permission to view their roles.",
        ) from exc

    return _log_response("socrata_get_user_roles", _render(
        roles, format, detail, "User Roles", [("Domain", domain), ("User ID", userId)],
    ))


@mcp.tool(name="socrata_update_user_roles", annotations=IDEMPOTENT_WRITE)
def update_user_roles(
    domain: Domain,
    userId: Annotated[str, Field(description="User ID to update roles for")],
    roles: Annotated[
        list[str],
        Field(description='Complete list of role names to assign (e.g., ["administrator", "editor"])'),
    ],
    format: Format = "json",
) -> str:
    """Set the roles assigned to a user within a Socrata domain.

    The list you pass REPLACES the user's current roles.  Check them first
    with socrata_get_user_roles.
    """
    _log_request("socrata_update_user_roles", domain=domain, userId=userId, roles=roles)
    try:
        result = users.update_user_roles(get_client(), domain, userId, roles)
    except Exception as exc:
        raise _fail(
            "socrata_update_user_roles", f"update roles for user {userId} on {domain}", exc,
            "Check if you have admin permissions and the roles are valid for this domain.",
        ) from exc

    return _log_response("socrata_update_user_roles", _render(
        result, format, "detailed", "User Roles Updated",
        [("Domain", domain), ("User ID", userId), ("New Roles", ", ".join(roles)), ("Status", "Success")],
    ))


# =============================================================================
# ASSET MANAGEMENT TOOLS
# =============================================================================
# The two update_* tools below are read-modify-write: they fetch the current
# document, merge your changes in (core/assets.py), and PUT the result.
# Fields you leave out are never touched.
# =============================================================================
@mcp.tool(name="socrata_get_metadata", annotations=READ_ONLY)
def get_metadata(
    domain: Domain,
    assetId: AssetId,
    format: Format = "json",
    detail: Detail = "detailed",
) -> str:
    """Retrieve comprehensive metadata for a Socrata dataset or asset.

    Use this to understand a dataset's description, columns and properties
    before analysis or modification.
    """
    _log_request("socrata_get_metadata", domain=domain, assetId=assetId)
    try:
        metadata = assets.get_metadata(get_client(), ResourceIdentifier(domain, assetId))
    except Exception as exc:
        raise _fail(
            "socrata_get_metadata", f"get metadata for asset {assetId} on {domain}", exc,
            "Check if the asset ID is correct and publicly accessible.",
        ) from exc

    return _log_response("socrata_get_metadata", _render(
        metadata, format, detail, "Dataset Metadata",
        [
            ("Domain", domain),
            ("Asset ID", assetId),
            ("Name", _field(metadata, "name", "Unknown")),
            ("Description", _field(metadata, "description", "None")),
        ],
    ))


@mcp.tool(name="socrata_update_metadata", annotations=IDEMPOTENT_WRITE)
def update_metadata(
    domain: Domain,
    assetId: AssetId,
    name: Annotated[Optional[str], Field(description="New name for the dataset")] = None,
    description: Annotated[
        Optional[str],
        Field(description="New description explaining the dataset contents and purpose"),
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        Field(description='Tags for categorization and search (e.g., ["crime", "safety", "police"])'),
    ] = None,
    category: Annotated[Optional[str], Field(description="Primary category classification")] = None,
    attribution: Annotated[Optional[str], Field(description="Data source attribution information")] = None,
    license: Annotated[Optional[str], Field(description="License information for the dataset")] = None,
    format: Format = "json",
) -> str:
    """Update metadata for a Socrata dataset: name, description, tags, category.

    Only the fields you pass are changed; everything else is kept as it is.
    """
    _log_request("socrata_update_metadata", domain=domain, assetId=assetId, name=name,
                 description=description, tags=tags, category=category,
                 attribution=attribution, license=license)
    patch = MetadataPatch(
        name=name,
        description=description,
        tags=tags,
        category=category,
        attribution=attribution,
        license=license,
    )
    try:
        result = assets.update_metadata(get_client(), ResourceIdentifier(domain, assetId), patch)
    except Exception as exc:
        raise _fail(
            "socrata_update_metadata", f"update metadata for asset {assetId} on {domain}", exc,
            "Check if you have edit permissions for this asset.",
        ) from exc

    return _log_response("socrata_update_metadata", _render(
        result, format, "detailed", "Metadata Updated Successfully",
        [
            ("Domain", domain),
            ("Asset ID", assetId),
            ("Updated Fields", ", ".join(patch.present_fields()) or "None"),
        ],
    ))


@mcp.tool(name="socrata_get_permissions", annotations=READ_ONLY)
def get_permissions(
    domain: Domain,
    assetId: AssetId,
    format: Format = "json",
    detail: Detail = "detailed",
) -> str:
    """Check current permissions and access levels for a Socrata dataset.

    WHEN TO CALL THIS: Before socrata_update_permissions, to see the
    current scope and who already has access.
    """
    _log_request("socrata_get_permissions", domain=domain, assetId=assetId)
    try:
        permissions = assets.get_permissions(get_client(), ResourceIdentifier(domain, assetId))
    except Exception as exc:
        raise _fail(
            "socrata_get_permissions", f"get permissions for asset {assetId} on {domain}", exc,
            "Check if you have permission to view access settings for this asset.",
        ) from exc

    grantees = permissions.get("users") if isinstance(permissions, dict) else None
    return _log_response("socrata_get_permissions", _render(
        permissions, format, detail, "Asset Permissions",
        [
            ("Domain", domain),
            ("Asset ID", assetId),
            ("Scope", _field(permissions, "scope", "Unknown")),
            ("Users with Access", _count(grantees)),
        ],
    ))


@mcp.tool(name="socrata_update_permissions", annotations=NON_IDEMPOTENT_WRITE)
def update_permissions(
    domain: Domain,
    assetId: AssetId,
    scope: Annotated[
        Optional[Literal["private", "public", "site"]],
        Field(description='Access scope: "private" (owner only), "public" (everyone), "site" (domain users only)'),
    ] = None,
    users: Annotated[
        Optional[list[UserPermissionInput]],
        Field(description="Users with their specific access levels"),
    ] = None,
    replaceUsers: Annotated[
        bool,
        Field(description="If true, replace all existing users; if false, merge with current users"),
    ] = False,
    format: Format = "json",
) -> str:
    """Modify access permissions for a Socrata dataset.

    This tool gets the current permissions, merges your changes, and
    writes the result back.  By default each user you pass is matched to an
    existing grant (by id, else by email) and updated in place, or added if
    new.  replaceUsers=true discards every existing grant instead.
    """
    _log_request("socrata_update_permissions", domain=domain, assetId=assetId, scope=scope,
                 users=len(users) if users is not None else None, replaceUsers=replaceUsers)
    patch = PermissionPatch(
        scope=scope,
        users=[user.to_grant() for user in users] if users is not None else None,
        replace_users=replaceUsers,
    )
    try:
        result = assets.update_permissions(get_client(), ResourceIdentifier(domain, assetId), patch)
    except Exception as exc:
        raise _fail(
            "socrata_update_permissions", f"update permissions for asset {assetId} on {domain}", exc,
            "Check if you have admin permissions for this asset and the user/email addresses are valid.",
        ) from exc

    if users is not None:
        user_updates = f"{len(users)} users {'replaced' if replaceUsers else 'merged'}"
    else:
        user_updates = "None"
    return _log_response("socrata_update_permissions", _render(
        result, format, "detailed", "Permissions Updated Successfully",
        [
            ("Domain", domain),
            ("Asset ID", assetId),
            ("New Scope", scope or "Unchanged"),
            ("User Updates", user_updates),
        ],
    ))


# =============================================================================
# PUBLISHING AND SCHEDULING TOOLS
# =============================================================================
@mcp.tool(name="socrata_get_schedule", annotations=READ_ONLY)
def get_schedule(
    domain: Domain,
    fxf: Annotated[
        Optional[str],
        Field(description='Dataset identifier (4x4 format like "abcd-1234") - if you know the exact ID'),
    ] = None,
    assetName: Annotated[
        Optional[str],
        Field(description="Dataset name to search for - will find matching datasets and show their schedules"),
    ] = None,
    format: Format = "json",
    detail: Detail = "detailed",
) -> str:
    """Get publishing schedule and update cadence for Socrata datasets.

    Provide either the dataset ID (fxf) or a dataset name.  A name can
    match several datasets; each gets its own entry, and one failing entry
    carries an "error" field without hiding the others.
    """
    _log_request("socrata_get_schedule", domain=domain, fxf=fxf, assetName=assetName)
    try:
        resolved = publishing.resolve_schedule(get_client(), domain, fxf=fxf, asset_name=assetName)
    except Exception as exc:
        raise _fail(
            "socrata_get_schedule", f"get publishing schedule on {domain}", exc,
            "Try using a specific dataset ID or check if the dataset name is correct.",
        ) from exc

    if isinstance(resolved, list):
        data: Any = [item.to_dict() for item in resolved]
        found = len(resolved)
    else:
        data = resolved.to_dict()
        found = 1
    _log_status(f"Resolved {found} schedule(s)")

    if fxf:
        title, facts = "Publishing Schedule", [("Domain", domain), ("Dataset ID", fxf)]
    else:
        title = "Publishing Schedule Results"
        facts = [("Domain", domain), ("Search", assetName), ("Datasets Found", found)]
    return _log_response("socrata_get_schedule", _render(data, format, detail, title, facts))


# =============================================================================
# ACTIVITY AND AUDIT TOOLS
# =============================================================================
@mcp.tool(name="socrata_get_activity_log", annotations=READ_ONLY)
def get_activity_log(
    domain: Domain,
    assetId: AssetId,
    limit: Annotated[
        int, Field(ge=1, le=1000, description="Maximum number of activity entries to return (1-1000)")
    ] = 100,
    offset: Offset = 0,
    startDate: Annotated[
        Optional[str],
        Field(description='Start date filter in ISO format (e.g., "2023-01-01")'),
    ] = None,
    endDate: Annotated[
        Optional[str],
        Field(description='End date filter in ISO format (e.g., "2023-12-31")'),
    ] = None,
    activityType: Annotated[
        Optional[str],
        Field(description='Filter by activity type (e.g., "create", "update", "delete", "view", "download")'),
    ] = None,
    format: Format = "json",
    detail: Detail = "detailed",
) -> str:
    """Retrieve the activity log and audit trail for a Socrata dataset."""
    _log_request("socrata_get_activity_log", domain=domain, assetId=assetId, limit=limit,
                 offset=offset, startDate=startDate, endDate=endDate,
                 activityType=activityType)
    query = ActivityQuery(
        limit=limit,
        offset=offset,
        start_date=startDate,
        end_date=endDate,
        activity_type=activityType,
    )
    try:
        log = activity.get_activity_log(get_client(), domain, assetId, query)
    except Exception as exc:
        raise _fail(
            "socrata_get_activity_log", f"get activity log for asset {assetId} on {domain}", exc,
            "Check if the asset exists and you have permission to view its activity log.",
        ) from exc

    summary = None
    if isinstance(log, list):
        type_filter = f' of type "{activityType}"' if activityType else ""
        date_range = (
            f" ({startDate or 'beginning'} to {endDate or 'now'})"
            if startDate or endDate
            else ""
        )
        summary = f"**Activity Summary:** {len(log)} entries found{type_filter}{date_range}"
    return _log_response("socrata_get_activity_log", _render(
        log, format, detail, "Activity Log",
        [("Domain", domain), ("Asset ID", assetId), ("Page", page_number(offset, limit))],
        summary=summary,
    ))


# =============================================================================
# WORKFLOW MANAGEMENT TOOLS
# =============================================================================
@mcp.tool(name="socrata_get_workflow_context", annotations=READ_ONLY)
def get_workflow_context(
    domain: Domain,
    workflowId: Annotated[str, Field(description="Workflow identifier to get context for")],
    format: Format = "json",
    detail: Detail = "detailed",
) -> str:
    """Retrieve workflow context and configuration for Socrata automation processes."""
    _log_request("socrata_get_workflow_context", domain=domain, workflowId=workflowId)
    try:
        context = workflows.get_workflow_context(get_client(), domain, workflowId)
    except Exception as exc:
        raise _fail(
            "socrata_get_workflow_context", f"get workflow context for {workflowId} on {domain}", exc,
            "Check if the workflow ID is correct and you have permission to access workflow information.",
        ) from exc

    return _log_response("socrata_get_workflow_context", _render(
        context, format, detail, "Workflow Context",
        [("Domain", domain), ("Workflow ID", workflowId), ("Status", _field(context, "status", "Unknown"))],
    ))


@mcp.tool(name="socrata_update_workflow_context", annotations=NON_IDEMPOTENT_WRITE)
def update_workflow_context(
    domain: Domain,
    workflowId: Annotated[str, Field(description="Workflow identifier to update context for")],
    context: Annotated[
        dict[str, Any],
        Field(description="Context data to write - JSON object with workflow configuration parameters"),
    ],
    format: Format = "json",
) -> str:
    """Update workflow context and configuration for Socrata automation processes.

    The object you pass is written as-is.  Fetch the current context first
    with socrata_get_workflow_context if you only want to change part of it.
    """
    _log_request("socrata_update_workflow_context", domain=domain, workflowId=workflowId,
                 context=list(context))
    try:
        result = workflows.update_workflow_context(get_client(), domain, workflowId, context)
    except Exception as exc:
        raise _fail(
            "socrata_update_workflow_context", f"update workflow context for {workflowId} on {domain}", exc,
            "Check if you have permission to modify workflows and the context data is valid.",
        ) from exc

    return _log_response("socrata_update_workflow_context", _render(
        result, format, "detailed", "Workflow Context Updated",
        [
            ("Domain", domain),
            ("Workflow ID", workflowId),
            ("Status", "Success"),
            ("Updated Fields", ", ".join(context) or "None"),
        ],
    ))


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    """Build the client and serve over stdio."""
    get_client()
    _log_status(f"Socrata MCP server starting ({len(TOOL_NAMES)} tools)")
    mcp.run()


TOOL_NAMES = (
    "socrata_get_catalog",
    "socrata_search_catalog",
    "socrata_search_users",
    "socrata_search_teams",
    "socrata_get_user_roles",
    "socrata_update_user_roles",
    "socrata_get_metadata",
    "socrata_update_metadata",
    "socrata_get_permissions",
    "socrata_update_permissions",
    "socrata_get_schedule",
    "socrata_get_activity_log",
    "socrata_get_workflow_context",
    "socrata_update_workflow_context",
)


if __name__ == "__main__":
    main()
