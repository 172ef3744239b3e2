class ToolInvocationError(Exception):
    """Raised when an external tool is missing, times out, or exits non-zero."""

    def __init__(
        self,
        tool: str,
        message: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(f"{tool}: {message}")
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr


class ToolTimeoutError(ToolInvocationError):
    """Raised when an external tool exceeds its execution timeout."""
