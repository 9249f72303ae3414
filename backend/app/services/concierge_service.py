from __future__ import annotations

from typing import TYPE_CHECKING

from app.llm.base import ChatMessage
from app.llm.fallback import execute_with_fallback
from app.llm.prompts.concierge import build_system_instruction
from app.utils.exceptions import ChatError

if TYPE_CHECKING:
    from app.llm.base import LLMModel, LLMProvider
    from app.schemas.agent_settings import AgentSettings
    from app.schemas.concierge import ChatTurn
    from app.schemas.property import PropertyRecord


def _to_messages(history: list[ChatTurn]) -> list[ChatMessage]:
    return [
        ChatMessage(role="model" if turn.role in ("model", "assistant") else "user", text=turn.text)
        for turn in history
    ]


async def chat_with_guard(
    history: list[ChatTurn],
    property_record: PropertyRecord,
    agent_settings: AgentSettings,
    llm: LLMProvider,
) -> str:
    """Send the latest user turn to the concierge and return its reply as-is.

    The two-strike gate, fuzzy matching and lead-capture rules live in the
    system instruction; nothing here tracks conversation state.
    """
    messages = _to_messages(history)
    if not messages:
        raise ChatError("Chat history is empty")
    if messages[-1].role != "user":
        raise ChatError("The last chat turn must come from the user")

    *previous, latest = messages
    system_instruction = build_system_instruction(agent_settings, property_record)

    async def _send(model: LLMModel) -> str:
        return await model.chat(previous, latest.text)

    return await execute_with_fallback(
        _send, llm, system_instruction=system_instruction
    )
