"""
Application error kinds.

Every error carries a human-readable message and enough detail for the caller
to fix the input or retry; the API layer renders them as structured failures.
"""
from typing import Any, Dict, List, Optional

RAW_OUTPUT_PREVIEW_CHARS = 500


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": False, "error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    """Missing or malformed required fields."""

    status_code = 400

    def __init__(
        self,
        message: str,
        missing_fields: Optional[List[str]] = None,
        details: Optional[Any] = None,
    ):
        self.missing_fields = list(missing_fields or [])
        if details is None and self.missing_fields:
            details = {"missing_fields": self.missing_fields}
        super().__init__(message, details)

    @classmethod
    def for_missing(cls, missing_fields: List[str]) -> "ValidationError":
        return cls(
            f"Missing required fields: {', '.join(missing_fields)}",
            missing_fields=missing_fields,
        )


class NotFoundError(AppError):
    """Referenced schedule, session or user does not exist."""

    status_code = 404


class GenerationError(AppError):
    """The content generator returned unparsable or structurally invalid output."""

    status_code = 502

    def __init__(self, message: str, raw_output: Optional[str] = None):
        self.raw_output = (raw_output or "")[:RAW_OUTPUT_PREVIEW_CHARS]
        details = {"raw_response": self.raw_output} if raw_output is not None else None
        super().__init__(message, details)


class ExtractionError(AppError):
    """Text could not be extracted from an uploaded document."""

    status_code = 422


class PersistenceError(AppError):
    """A write to the document store failed."""

    status_code = 500


def require_fields(values: Dict[str, Any], fields: List[str]) -> None:
    """
    Raise ValidationError listing every field that is absent or empty.

    Args:
        values: Mapping of field name to supplied value
        fields: Names that must be present

    Raises:
        ValidationError: If any field is missing
    """
    missing = [name for name in fields if values.get(name) in (None, "")]
    if missing:
        raise ValidationError.for_missing(missing)
