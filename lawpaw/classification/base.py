from abc import ABC, abstractmethod

from lawpaw.classification.models import DocumentMetadata


class BaseClassifier(ABC):
    """Contract for all metadata classifiers."""

    @abstractmethod
    def classify(self, text: str) -> DocumentMetadata:
        """Turn OCR text into a complete DocumentMetadata record.

        Args:
            text: Text recovered from the top of the first page.

        Returns:
            DocumentMetadata carrying every canonical field. Failures are
            absorbed into the default record with ``error`` set; this method
            does not raise for provider or parsing problems.
        """
