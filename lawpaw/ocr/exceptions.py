class OcrError(Exception):
    """Raised inside an extractor when a stage cannot produce its artifact."""
