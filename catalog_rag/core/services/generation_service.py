"""Use-case service for answering a question about the catalog."""

import logging

from ..domain import MISSING_QUESTION_MESSAGE, AnswerResult
from ..domain.utils import clean_text, is_blank
from ..ports.llm_port import LLMPort
from .prompt_builder import PromptBuilder
from .retrieval_service import RetrievalService

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_TOP_K = 3


class GenerationService:
    """Orchestrates retrieval, prompt assembly and the generation call."""

    def __init__(
        self,
        retriever: RetrievalService,
        llm: LLMPort,
        prompt_builder: PromptBuilder | None = None,
        top_k: int = DEFAULT_CONTEXT_TOP_K,
    ) -> None:
        self.retriever = retriever
        self.llm = llm
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.top_k = top_k

    async def answer(self, question: str | None) -> AnswerResult:
        """Answer a question grounded in the most relevant products.

        An empty question is a validation outcome, not an error: it returns a
        message without touching the embedder, the index or the model.

        Returns:
            AnswerResult carrying either the validation message or the
            generation model's output unmodified.
        """
        if is_blank(question):
            logger.info("Rejected empty question")
            return AnswerResult(message=MISSING_QUESTION_MESSAGE)

        clean_question = clean_text(question).strip()
        matches = await self.retriever.retrieve_similar_to_text(clean_question, self.top_k)
        context = self.prompt_builder.build_context(matches)
        messages = self.prompt_builder.build(clean_question, context)

        logger.debug(
            "Generating answer from %d matches (%d context chars)",
            len(matches),
            len(context.text),
        )
        output = await self.llm.generate(messages)
        return AnswerResult(output=output, context=context)
