# =============================================================================
# core/activity.py  -  Activity Log / Audit Trail
# =============================================================================

from typing import Any

from core.models import ActivityQuery
from core.socrata import SocrataClient


def get_activity_log(
    client: SocrataClient,
    domain: str,
    asset_id: str,
    query: ActivityQuery,
) -> Any:
    """Fetch one page of an asset's activity log.

    A zero limit/offset is not sent: Socrata's own defaults apply then.
    """
    params = {
        "asset_id": asset_id,
        "limit": query.limit or None,
        "offset": query.offset or None,
        "start_date": query.start_date or None,
        "end_date": query.end_date or None,
        "activity_type": query.activity_type or None,
    }
    return client.get(client.url(domain, "/api/catalog/v1/activity_log", params))
