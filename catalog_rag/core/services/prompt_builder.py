"""Prompt construction for grounded answers."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from ..domain import ChatMessage, QueryMatch, RetrievalContext
from .prompts import CONTEXT_HEADER, PRODUCT_QA_SYSTEM_PROMPT


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, str | int | float | bool)


def _render_value(value: Any) -> str:
    return str(value) if _is_scalar(value) else json.dumps(value, ensure_ascii=False)


def render_match(metadata: Mapping[str, Any]) -> str:
    """Render one match's metadata as a Markdown block.

    ``name`` becomes a heading. Nested mappings render as an indented list
    under their key, other structured values as JSON.
    """
    lines: list[str] = []
    for key, value in metadata.items():
        if key == "name":
            lines.append(f"## {value}")
        elif isinstance(value, Mapping):
            lines.append(f"- {key}:")
            lines.extend(
                f"  - {inner_key}: {_render_value(inner)}"
                for inner_key, inner in value.items()
            )
        else:
            lines.append(f"- {key}: {_render_value(value)}")
    return "\n".join(lines)


class PromptBuilder:
    """Build generation messages from ranked matches."""

    def __init__(self, system_prompt: str = PRODUCT_QA_SYSTEM_PROMPT) -> None:
        self.system_prompt = system_prompt

    def build_context(self, matches: list[QueryMatch]) -> RetrievalContext:
        """Render matches in rank order, skipping those without metadata."""
        blocks = [render_match(match.metadata) for match in matches if match.metadata]
        return RetrievalContext(matches=list(matches), text="\n\n".join(blocks))

    def build(self, question: str, context: RetrievalContext) -> list[ChatMessage]:
        system = f"{self.system_prompt}\n{CONTEXT_HEADER}\n{context.text}"
        return [
            ChatMessage(role="system", content=system),
            ChatMessage(role="user", content=question),
        ]
