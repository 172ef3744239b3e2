class InferenceError(Exception):
    """Raised when classification output cannot be obtained or parsed."""


class InferenceNetworkError(InferenceError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
