import numpy as np
import pytest

from repovector.core.errors import ValidationError
from repovector.schemas import CodeChunk, IngestRequest, SearchRequest


def test_search_request_defaults():
    request = SearchRequest.parse(query="where is auth?", repository="acme/widgets")
    assert request.branch == "main"
    assert request.limit == 10


def test_blank_branch_defaults_to_main():
    request = SearchRequest.parse(query="q", repository="acme/widgets", branch="  ")
    assert request.branch == "main"


@pytest.mark.parametrize(
    "fields",
    [
        {"query": "", "repository": "acme/widgets"},
        {"query": "q", "repository": "   "},
        {"query": "q", "repository": "acme/widgets", "limit": 0},
        {"query": "q", "repository": "acme/widgets", "limit": -3},
    ],
)
def test_search_request_rejects_invalid_fields(fields):
    with pytest.raises(ValidationError):
        SearchRequest.parse(**fields)


def test_ingest_request_accepts_wire_name():
    request = IngestRequest.parse(repoUrl="https://github.com/acme/widgets", branch=None)
    assert request.repo_url == "https://github.com/acme/widgets"
    assert request.branch == "main"
    assert request.clear_existing is True


def test_ingest_request_requires_url():
    with pytest.raises(ValidationError, match="repoUrl is required"):
        IngestRequest.parse(repoUrl="")


def test_code_chunk_to_dict_omits_embedding():
    chunk = CodeChunk(
        content="x",
        file_path="main.go",
        repository="acme/widgets",
        embedding=np.ones(3, dtype=np.float32),
    )
    data = chunk.to_dict()
    assert "embedding" not in data
    assert data["filePath"] == "main.go"
    assert data["language"] == "Unknown"
