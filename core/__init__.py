# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the logic for talking to a Socrata open-data
# portal: configuration, the domain guard, the HTTP client, the merge engine,
# the schedule resolver and the response shaper.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK or any orchestration
#   framework.  Every function takes its SocrataClient as an argument, so the
#   whole package can be exercised with a fake client and no network.
# =============================================================================
