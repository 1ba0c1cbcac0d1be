import pytest
from conftest import FakeEmbedder, FakeStore, FakeSummarizer, make_chunk

from repovector.core.errors import EmbeddingError, SummaryError
from repovector.schemas import SearchRequest
from repovector.services.search import SearchService


def request(**overrides):
    fields = {"query": "how does checkout work?", "repository": "acme/widgets"}
    fields.update(overrides)
    return SearchRequest.parse(**fields)


@pytest.mark.asyncio
async def test_search_returns_ranked_chunks():
    store = FakeStore([make_chunk("src/foo.txt"), make_chunk("main.go"), make_chunk("handlers/x.go")])
    service = SearchService(FakeEmbedder(), store, FakeSummarizer())

    chunks = await service.search(request(branch="release", limit=5))

    assert [c.file_path for c in chunks] == ["main.go", "handlers/x.go", "src/foo.txt"]
    assert store.search_calls == [("acme/widgets", "release", 5)]


@pytest.mark.asyncio
async def test_search_respects_limit():
    store = FakeStore([make_chunk(f"pkg/f{i}.go") for i in range(20)])
    service = SearchService(FakeEmbedder(), store, FakeSummarizer())

    chunks = await service.search(request(limit=4))

    assert len(chunks) == 4


@pytest.mark.asyncio
async def test_summary_receives_at_most_three_chunks():
    store = FakeStore([make_chunk(f"pkg/f{i}.go") for i in range(8)])
    summarizer = FakeSummarizer(answer="Checkout is handled by the cart service.")
    service = SearchService(FakeEmbedder(), store, summarizer)

    result = await service.search_with_summary(request())

    forwarded, query = summarizer.calls[0]
    assert len(forwarded) == 3
    assert query == "how does checkout work?"
    assert result.summary == "Checkout is handled by the cart service."
    assert result.chunks == forwarded
    assert result.metadata == {
        "repository": "acme/widgets",
        "branch": "main",
        "query": "how does checkout work?",
    }


@pytest.mark.asyncio
async def test_summary_with_everything_filtered_out():
    store = FakeStore([make_chunk(".git/config"), make_chunk("a.go", content="x")])
    summarizer = FakeSummarizer()
    service = SearchService(FakeEmbedder(), store, summarizer)

    result = await service.search_with_summary(request())

    assert summarizer.calls[0][0] == []
    assert result.chunks == []


@pytest.mark.asyncio
async def test_summary_error_fails_request():
    store = FakeStore([make_chunk("main.go")])
    summarizer = FakeSummarizer(error=SummaryError("Summary generation failed: rate limited"))
    service = SearchService(FakeEmbedder(), store, summarizer)

    with pytest.raises(SummaryError, match="rate limited"):
        await service.search_with_summary(request())


@pytest.mark.asyncio
async def test_query_embedding_error_propagates():
    store = FakeStore([make_chunk("main.go")])
    service = SearchService(FakeEmbedder(fail_marker="checkout"), store, FakeSummarizer())

    with pytest.raises(EmbeddingError):
        await service.search(request())

    assert store.search_calls == []
