from agent.prompt import get_steward_prompt
from tools.mcp_server import TOOL_NAMES


def test_prompt_lists_every_tool():
    prompt = get_steward_prompt()

    for name in TOOL_NAMES:
        assert name in prompt


def test_prompt_names_the_default_portal():
    assert "DEFAULT PORTAL: data.x.org" in get_steward_prompt("data.x.org")
    assert "ask the user which Socrata domain" in get_steward_prompt()
