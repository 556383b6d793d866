"""Exceptions raised by the work hours core."""


class WorkHoursError(Exception):
    """Base class for all work hours errors."""


class ValidationError(WorkHoursError):
    """A shift could not be saved because its input is invalid."""


class CorruptStoreError(WorkHoursError):
    """The stored entries block could not be decoded into entries."""


class NothingToExportError(WorkHoursError):
    """The selected month has no entries to export."""


class NothingToClearError(WorkHoursError):
    """The selected month has no entries to clear."""


class WorkflowStateError(WorkHoursError):
    """A workflow step was invoked from the wrong state."""
