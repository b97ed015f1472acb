"""Domain exceptions raised by the recommendation and draft engine."""


class InterventionEngineError(Exception):
    """Base exception for this project."""


class DimensionMismatch(InterventionEngineError):
    """Raised when two vectors compared for similarity differ in length."""

    def __init__(self, left: int, right: int):
        super().__init__(f"Vector dimension mismatch: {left} vs {right}")
        self.left = left
        self.right = right


class InvalidPayload(InterventionEngineError):
    """Raised when required structured fields are missing or malformed.

    ``errors`` maps a field group (``dataset``, ``insights``, ``plan``, ``query``...)
    to the problems found in it.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        groups = ", ".join(
            f"{group}: {'; '.join(problems)}" for group, problems in errors.items()
        )
        super().__init__(f"Missing or malformed payload ({groups})")


class UpstreamProviderFailure(InterventionEngineError):
    """Raised when the embedding or generation provider fails or returns bad data."""


class EmbeddingsUnavailable(UpstreamProviderFailure):
    """Raised when no catalog item carries an embedding to rank against."""


class BatchWriteError(InterventionEngineError):
    """Raised when a chunk of a batched write fails.

    ``committed`` is the number of rows already written by earlier chunks.
    """

    def __init__(self, message: str, committed: int):
        super().__init__(message)
        self.committed = committed
