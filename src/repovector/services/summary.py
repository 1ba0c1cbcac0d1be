"""Summaries of retrieved chunks via LiteLLM chat completion."""

from litellm import acompletion
from loguru import logger

from repovector.core.errors import SummaryError
from repovector.schemas import CodeChunk

SYSTEM_INSTRUCTION = """You are a technical expert. Provide ONLY direct answers to queries about code repositories.
- Answer the specific question asked
- Be concise and to the point
- Do not include additional context unless specifically asked
- If the answer is found, just state it directly"""


def build_summary_prompt(chunks: list[CodeChunk], query: str) -> str:
    """Format retrieved chunks and the query into the user prompt."""
    context = "".join(
        f"File: {chunk.file_path}\n```{chunk.language}\n{chunk.content}\n```\n\n"
        for chunk in chunks
    )
    return (
        f"Question: {query}\n\n"
        f"Code Context:\n{context}"
        "Provide only the direct answer to the question."
    )


class SummaryService:
    """Answers a query from code chunks with a chat-completion model."""

    def __init__(
        self,
        model_name: str,
        api_key: str | None = None,
        api_base: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 200,
    ) -> None:
        self.model_name = model_name
        self.api_key = api_key
        self.api_base = api_base
        self.temperature = temperature
        self.max_tokens = max_tokens
        logger.info(f"Initialized SummaryService with model={self.model_name}")

    async def summarize(self, chunks: list[CodeChunk], query: str) -> str:
        """Ask the model to answer ``query`` from ``chunks``.

        Returns:
            The first choice's message content, unmodified.

        Raises:
            SummaryError: If the vendor call fails or returns no choices.
        """
        messages = [
            {"role": "system", "content": SYSTEM_INSTRUCTION},
            {"role": "user", "content": build_summary_prompt(chunks, query)},
        ]

        try:
            response = await acompletion(
                model=self.model_name,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                api_key=self.api_key,
                api_base=self.api_base,
            )
        except Exception as e:
            logger.error(f"Summary request failed: {e}")
            raise SummaryError(f"Summary generation failed: {e}") from e

        if not response.choices:
            raise SummaryError("Summary generation failed: no choices returned")

        content = response.choices[0].message.content
        if content is None:
            raise SummaryError("Summary generation failed: response has no text content")

        logger.debug(f"Generated summary from {len(chunks)} chunks")
        return content
