# =============================================================================
# main.py  -  Entry Point for the Open-Data Steward Agent
# =============================================================================
#
# HOW TO RUN:
#   python main.py                      # interactive session
#   python main.py "list datasets on data.cityofchicago.org tagged crime"
#
# WHAT HAPPENS:
#   1. Loads .env (SOCRATA_*, OPENROUTER_API_KEY, AGENT_MODEL)
#   2. Creates the Google ADK agent (agent/steward_agent.py), which starts
#      the Socrata tool server as a subprocess
#   3. Sends each question to the agent and streams its tool calls
#   4. Prints the agent's final answer
#
# The tool server can also be used without this agent: point any MCP client
# at "python -m tools.mcp_server".
# =============================================================================

import asyncio
import sys

from dotenv import load_dotenv

# Must run before the agent is created: LiteLlm reads its API key, and the
# tool server subprocess inherits SOCRATA_* from this environment.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.steward_agent import create_agent

APP_NAME = "socrata_steward"
USER_ID = "steward"


async def ask(runner: Runner, session_id: str, question: str) -> str:
    """Send one question and return the agent's last text response."""
    message = types.Content(role="user", parts=[types.Part(text=question)])
    final_response = ""

    async for event in runner.run_async(
        user_id=USER_ID,
        session_id=session_id,
        new_message=message,
    ):
        if event.content and event.content.parts:
            for part in event.content.parts:
                if getattr(part, "text", None):
                    final_response = part.text
                if getattr(part, "function_call", None):
                    print(f"  🔧 Calling tool: {part.function_call.name}")

    return final_response


async def run_agent(questions: list[str]) -> None:
    """Run one-shot questions, or an interactive loop when none are given."""
    print("=" * 70)
    print("  SOCRATA OPEN-DATA STEWARD")
    print("  Powered by Google ADK + LiteLlm + FastMCP")
    print("=" * 70)

    agent = create_agent()
    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    if questions:
        for question in questions:
            print(f"\n🧑 You: {question}\n")
            answer = await ask(runner, session.id, question)
            print(f"\n🤖 Agent:\n\n{answer or '(no response)'}")
        return

    print("\n💬 Ask about datasets, metadata, permissions or schedules.")
    print("   (Type 'quit' to exit)\n")

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break
        if not user_input:
            continue

        print("\n🤖 Agent is thinking...\n")
        answer = await ask(runner, session.id, user_input)
        print("-" * 70)
        if answer:
            print(f"\n🤖 Agent:\n\n{answer}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")


if __name__ == "__main__":
    asyncio.run(run_agent(sys.argv[1:]))
