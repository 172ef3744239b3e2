class ReportExportError(Exception):
    """Raised when the batch CSV report cannot be written."""
