"""Error kinds raised by repovector services.

Skipping a file during ingestion is not an error: it is reported through
``SkipDecision`` in ``repovector.services.file_classifier``.
"""


class RepoVectorError(Exception):
    """Base class for every failure surfaced to callers."""


class ValidationError(RepoVectorError):
    """A required field is missing or invalid."""


class RepoIOError(RepoVectorError):
    """Filesystem or version-control failure."""


class CloneError(RepoIOError):
    """The repository could not be cloned or the branch checked out."""


class WalkError(RepoIOError):
    """The repository tree itself could not be walked."""


class EmbeddingError(RepoVectorError):
    """The embedding vendor call failed or was given empty input."""


class VectorStoreError(RepoVectorError):
    """The vector database rejected a store or search call."""


class SummaryError(RepoVectorError):
    """The chat-completion vendor call failed."""
