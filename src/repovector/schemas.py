"""Request, response and chunk types shared by the services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from repovector.core.errors import ValidationError

DEFAULT_BRANCH = "main"
DEFAULT_LIMIT = 10


@dataclass
class CodeChunk:
    """A line-bounded slice of one repository file."""

    content: str
    file_path: str  # relative to repo root, "/"-separated
    repository: str  # "owner/name"
    branch: str = DEFAULT_BRANCH
    language: str = "Unknown"
    chunk_index: int = 0
    embedding: np.ndarray | None = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Serialize without the embedding."""
        return {
            "content": self.content,
            "filePath": self.file_path,
            "repository": self.repository,
            "branch": self.branch,
            "language": self.language,
            "chunkIndex": self.chunk_index,
        }


@dataclass
class WalkStats:
    """Counters for a single repository walk."""

    files_seen: int = 0
    skipped: int = 0
    processed: int = 0
    chunks_stored: int = 0
    chunks_failed: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "files_seen": self.files_seen,
            "skipped": self.skipped,
            "processed": self.processed,
            "chunks_stored": self.chunks_stored,
            "chunks_failed": self.chunks_failed,
        }


def _default_branch(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_BRANCH
    return value.strip() if isinstance(value, str) else value


def _required_text(value: str, name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{name} is required")
    return value.strip()


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def parse(cls, **data: Any):
        """Validate keyword arguments, raising the service ``ValidationError``."""
        try:
            return cls(**data)
        except pydantic.ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise ValidationError(messages) from e


class SearchRequest(RequestModel):
    query: str
    repository: str
    branch: str = DEFAULT_BRANCH
    limit: int = Field(default=DEFAULT_LIMIT, gt=0)

    @field_validator("query")
    @classmethod
    def _check_query(cls, value: str) -> str:
        return _required_text(value, "query")

    @field_validator("repository")
    @classmethod
    def _check_repository(cls, value: str) -> str:
        return _required_text(value, "repository")

    @field_validator("branch", mode="before")
    @classmethod
    def _check_branch(cls, value: Any) -> Any:
        return _default_branch(value)


class IngestRequest(RequestModel):
    repo_url: str = Field(alias="repoUrl")
    branch: str = DEFAULT_BRANCH
    clear_existing: bool = True

    @field_validator("repo_url")
    @classmethod
    def _check_repo_url(cls, value: str) -> str:
        return _required_text(value, "repoUrl")

    @field_validator("branch", mode="before")
    @classmethod
    def _check_branch(cls, value: Any) -> Any:
        return _default_branch(value)


@dataclass
class SearchSummary:
    """Chunks forwarded to the summarizer plus its answer."""

    chunks: list[CodeChunk]
    summary: str
    metadata: dict[str, str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "chunks": [c.to_dict() for c in self.chunks],
            "summary": self.summary,
            "metadata": self.metadata,
        }


class ApiResponse(BaseModel):
    """Envelope returned by every MCP tool."""

    success: bool
    data: Any = None
    message: str = ""
