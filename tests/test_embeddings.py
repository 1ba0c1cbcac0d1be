from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import numpy as np
import pytest

from repovector.core.errors import EmbeddingError
from repovector.services.embeddings import EmbeddingService


@pytest.fixture
def service() -> EmbeddingService:
    return EmbeddingService("text-embedding-ada-002", api_key="sk-test")


@pytest.mark.asyncio
async def test_embed_returns_float32_vector(service):
    response = SimpleNamespace(data=[{"embedding": [0.1, 0.25, -0.5]}])
    with patch(
        "repovector.services.embeddings.aembedding", AsyncMock(return_value=response)
    ) as mock_embed:
        vector = await service.embed("  func main() {}  ")

    assert vector.dtype == np.float32
    assert vector.tolist() == pytest.approx([0.1, 0.25, -0.5])
    mock_embed.assert_awaited_once()
    assert mock_embed.await_args.args == ("text-embedding-ada-002",)
    assert mock_embed.await_args.kwargs["input"] == ["func main() {}"]
    assert mock_embed.await_args.kwargs["api_key"] == "sk-test"


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   \n"])
async def test_embed_rejects_empty_text(service, text):
    with patch("repovector.services.embeddings.aembedding", AsyncMock()) as mock_embed:
        with pytest.raises(EmbeddingError):
            await service.embed(text)
    mock_embed.assert_not_awaited()


@pytest.mark.asyncio
async def test_vendor_failure_becomes_embedding_error(service):
    with patch(
        "repovector.services.embeddings.aembedding",
        AsyncMock(side_effect=RuntimeError("401 Unauthorized")),
    ):
        with pytest.raises(EmbeddingError, match="401 Unauthorized"):
            await service.embed("hello")


@pytest.mark.asyncio
async def test_empty_vendor_response_is_error(service):
    with patch(
        "repovector.services.embeddings.aembedding",
        AsyncMock(return_value=SimpleNamespace(data=[])),
    ):
        with pytest.raises(EmbeddingError, match="No embeddings"):
            await service.embed("hello")
