from dataclasses import dataclass

OCR_ERROR_PREFIX = "Error during OCR: "


@dataclass(frozen=True)
class ExtractedText:
    """Text recovered from the top half of a document's first page."""

    text: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, reason: str) -> "ExtractedText":
        """Sentinel result: downstream steps still receive some text."""
        return cls(text=f"{OCR_ERROR_PREFIX}{reason}", error=reason)
