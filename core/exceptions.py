"""Error taxonomy for the ai-diagnose pipeline"""
from typing import Optional


class CurableError(Exception):
    """Base class for failures surfaced to API callers"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(CurableError):
    """Missing, malformed or rejected identity credential"""

    status_code = 401


class UpstreamReadFailure(CurableError):
    """A history read failed outright (not the same as returning no rows)"""

    def __init__(self, collection: str, cause: Optional[BaseException] = None):
        super().__init__(f"Failed to read {collection}")
        self.collection = collection
        self.cause = cause


class ModelFailure(CurableError):
    """The diagnostic model returned an error or an unusable response"""

    retryable = False


class ModelTimeout(ModelFailure):
    """The diagnostic model did not answer within the configured timeout"""

    retryable = True


class PersistenceFailure(CurableError):
    """The new assessment could not be written; the model result is discarded"""
