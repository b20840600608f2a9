"""Question-answering models."""

from dataclasses import dataclass, field
from typing import Any

from .product import QueryMatch

MISSING_QUESTION_MESSAGE = "Please tell me your question."


@dataclass(frozen=True)
class ChatMessage:
    """A role-tagged message sent to the generation model."""

    role: str
    content: str


@dataclass
class RetrievalContext:
    """Ranked matches used to ground an answer, plus their rendered text."""

    matches: list[QueryMatch] = field(default_factory=list)
    text: str = ""


@dataclass
class AnswerResult:
    """Outcome of answering a question.

    Exactly one of ``message`` (validation outcome) and ``output`` (the
    generation model's structured response, untouched) is set.
    """

    message: str | None = None
    output: dict[str, Any] | None = None
    context: RetrievalContext | None = None

    @property
    def is_validation_message(self) -> bool:
        return self.message is not None

    def to_response(self) -> dict[str, Any]:
        if self.message is not None:
            return {"message": self.message}
        return dict(self.output or {})
