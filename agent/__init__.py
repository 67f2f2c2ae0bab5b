# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains a Google ADK agent that USES the Socrata tool server.
#
# ARCHITECTURAL ROLE:
#   The agent/ layer is a client of tools/mcp_server.py, nothing more.  It:
#     1. Receives a data steward's question ("who can edit the 311 dataset?")
#     2. Decides which Socrata tools to call, and in what order
#     3. Interprets the results and answers in plain language
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the gateway: it reaches Socrata only through MCP tools
#   - It does NOT build URLs, merge permissions or format responses
# =============================================================================
