"""Gateway tools — the five operations exposed to callers."""

from functools import partial

from .channels import CHANNELS_LIST_TOOL
from .conversations import CONVERSATIONS_HISTORY_TOOL, CONVERSATIONS_REPLIES_TOOL
from .post_message import ADD_MESSAGE_TOOL
from .registry import Tool, ToolRegistry
from .search import CONVERSATIONS_SEARCH_TOOL

ALL_TOOLS = (
    CHANNELS_LIST_TOOL,
    CONVERSATIONS_HISTORY_TOOL,
    CONVERSATIONS_REPLIES_TOOL,
    CONVERSATIONS_SEARCH_TOOL,
    ADD_MESSAGE_TOOL,
)


def build_registry(gateway) -> ToolRegistry:
    """Register every tool with its handler bound to the gateway."""
    registry = ToolRegistry()
    for tool in ALL_TOOLS:
        registry.register(
            name=tool["name"],
            description=tool["description"],
            parameters=tool["parameters"],
            handler=partial(tool["handler"], gateway),
        )
    return registry


__all__ = ["ALL_TOOLS", "Tool", "ToolRegistry", "build_registry"]
