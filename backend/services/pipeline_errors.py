"""Failure taxonomy for the clone-analyze-aggregate pipeline.

Every failure is raised at its origin with a short diagnostic message.
The API layer turns any PipelineError into a plain-text 500 response
whose body is that message.
"""


class PipelineError(Exception):
    """Base class for all pipeline failures."""

    kind = "pipeline"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class IoFailure(PipelineError):
    """A filesystem operation failed (workspace removal, read error)."""

    kind = "io"


class FetchFailure(PipelineError):
    """The target URL was unreachable or returned a non-success status."""

    kind = "fetch"


class CloneFailure(PipelineError):
    """git clone could not run, failed, or produced no repository."""

    kind = "clone"


class WorkspaceFailure(PipelineError):
    """A usable temporary workspace could not be created."""

    kind = "workspace"
