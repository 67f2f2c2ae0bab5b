# =============================================================================
# agent/steward_agent.py  -  Google ADK Agent Configuration (LLM via LiteLlm)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the Google ADK agent that answers a data steward's questions by
#   calling the Socrata tools over MCP.
#
# HOW IT WORKS (simplified):
#
#   ┌──────────────────────────────┐      stdio       ┌────────────────────┐
#   │  Google ADK Agent            │ ───────────────▶ │  FastMCP Server    │
#   │  prompt + LLM (LiteLlm)      │ ◀─────────────── │  tools/mcp_server  │
#   └──────────────────────────────┘                  └────────────────────┘
#                                                              │
#                                                              ▼
#                                                     ┌────────────────────┐
#                                                     │  core/  ->  HTTPS  │
#                                                     │  Socrata REST API  │
#                                                     └────────────────────┘
#
# MCP CONNECTION:
#   ADK starts the tool server as a subprocess ("python -m tools.mcp_server")
#   from the project root and talks to it over stdin/stdout.  The subprocess
#   inherits our environment, so SOCRATA_DOMAIN / SOCRATA_ID / SOCRATA_SECRET
#   loaded from .env by main.py reach the server too.
#
# MODEL CHOICE:
#   AGENT_MODEL is any LiteLlm model string.  The default routes GPT-4o
#   through OpenRouter (LiteLlm reads OPENROUTER_API_KEY itself).
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_steward_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def server_parameters() -> StdioServerParameters:
    """How ADK launches the Socrata tool server."""
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=dict(os.environ),
    )


def create_agent(model: str = "", default_domain: str = "") -> Agent:
    """Create the open-data steward agent.

    Args:
        model: LiteLlm model string; falls back to AGENT_MODEL, then GPT-4o.
        default_domain: Portal the prompt should assume when the user names
            none.  Falls back to the first SOCRATA_DOMAIN entry.

    Returns:
        A configured Google ADK Agent instance.
    """
    model = model or os.environ.get("AGENT_MODEL", DEFAULT_MODEL)
    if not default_domain:
        allowlist = os.environ.get("SOCRATA_DOMAIN", "")
        default_domain = next((d.strip() for d in allowlist.split(",") if d.strip()), "")

    mcp_tools = MCPToolset(connection_params=server_parameters())

    return Agent(
        name="open_data_steward",
        model=LiteLlm(model=model),
        instruction=get_steward_prompt(default_domain),
        tools=[mcp_tools],
    )
