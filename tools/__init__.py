# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between an MCP client (an agent) and
#   core/.  Each tool:
#     1. Receives arguments FastMCP has already validated
#     2. Normalizes them into core/ objects (patches, queries, identifiers)
#     3. Calls exactly one core/ operation
#     4. Renders the result as bounded JSON or markdown text
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build URLs or merge documents (that's core/)
#   - They do NOT retry: a failed call becomes one ToolError for the agent
# =============================================================================
