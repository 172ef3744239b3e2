class ProcessorError(Exception):
    """Base exception for all batch-processing errors."""


class BatchValidationError(ProcessorError):
    """Raised when a batch request is invalid; the batch never starts."""


class PersistenceError(ProcessorError):
    """Raised when a document record cannot be written to the database."""


class BatchCancelledError(ProcessorError):
    """Raised at a stage boundary once the batch has been cancelled."""
