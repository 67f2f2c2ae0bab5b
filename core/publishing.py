# =============================================================================
# core/publishing.py  -  Publishing Schedule Resolver
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Answers "how often does this dataset get updated?" from Socrata's
#   publishing API (/api/publishing/v1/revision/datasets/{fxf}).
#
# TWO WAYS IN:
#   1. DIRECT (fxf given)
#        fetch the schedule -> one ScheduleSummary.  The dataset's name is
#        whatever the schedule payload says; we have nothing better.
#
#   2. SEARCH (asset_name given)
#        catalog search by name
#          -> keep only datasets (filters/files have no schedule)
#          -> fetch a schedule per match
#        Several datasets can share a name, so this can yield many
#        summaries.  One broken match does NOT sink the others: its failure
#        is recorded on its own summary as `error`.
#
#   fxf is checked first and wins if both are supplied.  A single result is
#   always returned unwrapped, matching the direct mode.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Union

from core.catalog import search_datasets_by_name
from core.errors import InvalidArguments, NotFound
from core.models import ScheduleSummary
from core.socrata import SocrataClient

logger = logging.getLogger(__name__)

MANUAL_CADENCE = "Manual/None"
MANUAL_SUMMARY = "Dataset is updated manually - no automated publishing schedule"
NO_SCHEDULE_ERROR = "No schedule data available - dataset may not have automated publishing"


def get_schedule(client: SocrataClient, domain: str, fxf: str) -> Any:
    return client.get(client.url(domain, f"/api/publishing/v1/revision/datasets/{fxf}"))


# =============================================================================
# SUMMARIZING A RAW SCHEDULE PAYLOAD
# =============================================================================
def _format_date(value: Any, missing: str) -> str:
    """Render a timestamp as a calendar date (YYYY-MM-DD)."""
    if not value:
        return missing
    try:
        if isinstance(value, (int, float)):
            # Socrata timestamps are usually epoch milliseconds
            seconds = value / 1000 if value > 1e11 else value
            return datetime.fromtimestamp(seconds, tz=timezone.utc).date().isoformat()
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date().isoformat()
    except (ValueError, OverflowError, OSError):
        return str(value)


def schedule_summary_text(schedule: dict[str, Any]) -> str:
    """One human-readable sentence describing a schedule block."""
    cadence = schedule.get("cadence")
    if not schedule.get("enabled") or not cadence or cadence == MANUAL_CADENCE:
        return MANUAL_SUMMARY

    last_update = _format_date(schedule.get("lastRun"), "Unknown")
    next_update = _format_date(schedule.get("nextRun"), "Not scheduled")
    return (
        f"Updates {str(cadence).lower()}, last updated: {last_update}, "
        f"next update: {next_update}"
    )


def summarize_schedule(
    payload: Any,
    dataset: Optional[dict[str, Any]] = None,
) -> ScheduleSummary:
    """Turn a raw publishing payload into a ScheduleSummary.

    `dataset` is the {name, fxf} pair from a catalog match.  Without it
    (direct mode) the pair is read from the payload itself.
    """
    if not payload:
        return ScheduleSummary(
            dataset=dataset or {"name": "Unknown", "fxf": "Unknown"},
            schedule=None,
            error=NO_SCHEDULE_ERROR,
        )

    # Anything but an object (e.g. a list of revisions) carries no schedule fields.
    fields = payload if isinstance(payload, dict) else {}
    schedule = {
        "cadence": fields.get("cadence") or MANUAL_CADENCE,
        "status": fields.get("status") or "Unknown",
        "enabled": bool(fields.get("enabled")),
        "lastRun": fields.get("lastRun") or None,
        "nextRun": fields.get("nextRun") or None,
        "rowCount": fields.get("rowCount") or 0,
        "owner": fields.get("owner") or "Unknown",
        "frequency": fields.get("frequency") or None,
        "timezone": fields.get("timezone") or None,
    }
    if dataset is None:
        dataset = {
            "name": fields.get("name") or "Unknown",
            "fxf": fields.get("fxf") or "Unknown",
        }
    return ScheduleSummary(
        dataset=dataset,
        schedule=schedule,
        summary=schedule_summary_text(schedule),
    )


# =============================================================================
# CATALOG MATCH HELPERS
# =============================================================================
def _resource(asset: dict[str, Any]) -> dict[str, Any]:
    return asset.get("resource") or {}


def _asset_type(asset: dict[str, Any]) -> Optional[str]:
    return _resource(asset).get("type") or (asset.get("classification") or {}).get(
        "domain_category"
    )


def is_dataset(asset: Any) -> bool:
    if not isinstance(asset, dict):
        return False
    classification = asset.get("classification") or {}
    return (
        _resource(asset).get("type") == "dataset"
        or classification.get("domain_category") == "dataset"
    )


def dataset_ref(asset: dict[str, Any]) -> dict[str, Any]:
    resource = _resource(asset)
    return {
        "name": resource.get("name") or asset.get("name"),
        "fxf": resource.get("id") or asset.get("id"),
    }


# =============================================================================
# THE RESOLVER
# =============================================================================
def resolve_schedule(
    client: SocrataClient,
    domain: str,
    fxf: Optional[str] = None,
    asset_name: Optional[str] = None,
) -> Union[ScheduleSummary, list[ScheduleSummary]]:
    """Find the publishing schedule(s) for a dataset id or a dataset name."""
    if not fxf and not asset_name:
        raise InvalidArguments(
            "Either 'fxf' (dataset ID) or 'asset_name' (dataset name) must be provided"
        )

    if fxf:
        return summarize_schedule(get_schedule(client, domain, fxf))

    matches = search_datasets_by_name(client, domain, asset_name)
    if not matches:
        raise NotFound(
            f'No datasets found matching name: "{asset_name}". '
            "Try searching the catalog first to find available datasets."
        )

    datasets = [asset for asset in matches if is_dataset(asset)]
    if not datasets:
        first = matches[0] if isinstance(matches[0], dict) else {}
        asset_type = _asset_type(first) or "asset"
        raise NotFound(
            f'"{asset_name}" is a {asset_type} and does not have a publishing '
            "schedule. Only datasets have schedules."
        )

    summaries: list[ScheduleSummary] = []
    for asset in datasets:
        ref = dataset_ref(asset)
        try:
            summary = summarize_schedule(get_schedule(client, domain, ref["fxf"]), ref)
        except Exception as exc:
            logger.warning("Schedule fetch failed for %s on %s: %s", ref["fxf"], domain, exc)
            summary = ScheduleSummary(
                dataset=ref,
                schedule=None,
                error=f"Unable to fetch schedule: {exc}",
            )
        summaries.append(summary)

    return summaries[0] if len(summaries) == 1 else summaries
