# =============================================================================
# core/catalog.py  -  Catalog Discovery
# =============================================================================
#
# Wraps Socrata's Discovery API (/api/catalog/v1).  Two flavours:
#   - get_catalog:    "show me every <type> on this portal" (quick browse)
#   - search_catalog: keyword + filter search with paging and ordering
#
# search_datasets_by_name is the lookup the schedule resolver uses when an
# agent only knows a dataset's name.
# =============================================================================

from typing import Any, Optional

from core.models import CatalogQuery
from core.socrata import SocrataClient

CATALOG_PATH = "/api/catalog/v1"


def get_catalog(
    client: SocrataClient,
    domain: str,
    asset_type: str,
    category: Optional[str] = None,
) -> Any:
    """List assets of one type ("dataset", "filter" or "file") on a domain."""
    url = client.url(
        domain,
        CATALOG_PATH,
        {"domains": domain, "only": asset_type, "categories": category or None},
    )
    return client.get(url)


def search_catalog(client: SocrataClient, domain: str, query: CatalogQuery) -> Any:
    """Advanced catalog search.  Empty filters are not sent at all."""
    params = {
        "domains": domain,
        "q": query.q or None,
        "categories": ",".join(query.categories) or None,
        "tags": ",".join(query.tags) or None,
        "attribution": query.attribution or None,
        "provenance": query.provenance or None,
        "visibility": query.visibility or None,
        "order": query.order,
        "limit": query.limit,
        "offset": query.offset,
    }
    return client.get(client.url(domain, CATALOG_PATH, params))


def search_datasets_by_name(client: SocrataClient, domain: str, name: str) -> list[Any]:
    """Free-text catalog search returning just the `results` list."""
    response = client.get(client.url(domain, CATALOG_PATH, {"domains": domain, "q": name}))
    if not isinstance(response, dict):
        return []
    return response.get("results") or []
