"""Async embedding generation service using LiteLLM."""

import numpy as np
from litellm import aembedding
from loguru import logger

from repovector.core.errors import EmbeddingError


class EmbeddingService:
    """Embedding adapter that calls the vendor API through LiteLLM."""

    def __init__(
        self,
        model_name: str,
        api_key: str | None = None,
        api_base: str | None = None,
    ) -> None:
        """Initialize the embedding service.

        Args:
            model_name: Name of the embedding model to use.
            api_key: Vendor API key, passed through to LiteLLM.
            api_base: Optional vendor base URL.
        """
        self.model_name = model_name
        self.api_key = api_key
        self.api_base = api_base
        logger.info(f"Initialized EmbeddingService with model={self.model_name}")

    async def embed(self, text: str) -> np.ndarray:
        """Generate the embedding for a single text.

        The vendor returns float64 values; they are narrowed to float32 here,
        which loses precision.

        Args:
            text: Text string to generate the embedding for.

        Returns:
            Embedding vector as a float32 array.

        Raises:
            EmbeddingError: If text is empty or the vendor call fails.
        """
        if not text or not isinstance(text, str) or not text.strip():
            raise EmbeddingError("Cannot generate embedding for empty text")

        try:
            response = await aembedding(
                self.model_name,
                input=[text.strip()],
                api_key=self.api_key,
                api_base=self.api_base,
            )
        except Exception as e:
            logger.error(f"Embedding request failed: {e}")
            raise EmbeddingError(f"Embedding request failed: {e}") from e

        if not response.data:
            raise EmbeddingError("No embeddings returned")

        embedding = np.asarray(response.data[0]["embedding"], dtype=np.float32)
        logger.debug(f"Generated embedding with {embedding.shape[0]} dimensions")
        return embedding
