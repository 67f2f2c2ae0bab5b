# =============================================================================
# core/workflows.py  -  Workflow Context
# =============================================================================

from typing import Any

from core.socrata import SocrataClient


def context_url(client: SocrataClient, domain: str, workflow_id: str) -> str:
    return client.url(domain, f"/api/catalog/v1/workflows/{workflow_id}/context")


def get_workflow_context(client: SocrataClient, domain: str, workflow_id: str) -> Any:
    return client.get(context_url(client, domain, workflow_id))


def update_workflow_context(
    client: SocrataClient,
    domain: str,
    workflow_id: str,
    context: dict[str, Any],
) -> Any:
    """PUT the given context object as-is.  No read-modify-write here."""
    return client.put(context_url(client, domain, workflow_id), context)
