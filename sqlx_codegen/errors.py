"""Error types for sqlx-codegen."""

from typing import Optional, Dict, Any


class CodegenError(Exception):
    """Base exception for code generation errors."""

    def __init__(self, message: str, code: str = "CODEGEN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConnectionError(CodegenError):
    """The connection descriptor could not establish a session."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class QueryError(CodegenError):
    """A catalog query failed at the driver level.

    The failing stage (``tables``, ``columns`` or ``table_info:<name>``) and
    the dialect are kept in ``details`` so the CLI can report where the run
    stopped.
    """

    def __init__(
        self,
        message: str,
        dialect: Optional[str] = None,
        stage: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if dialect:
            details["dialect"] = dialect
        if stage:
            details["stage"] = stage
        super().__init__(message, code="QUERY_ERROR", details=details)
        self.dialect = dialect
        self.stage = stage

    def get_user_friendly_message(self) -> str:
        """Return the message prefixed with the failed stage, if known."""
        if self.stage and self.dialect:
            return f"[{self.dialect}:{self.stage}] {self.message}"
        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message


class GenerationError(CodegenError):
    """Error while rendering or writing generated files."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="GENERATION_ERROR", details=details)
