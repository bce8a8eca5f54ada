"""
Directory exceptions
====================

Per-request failures raised by the services. None of them is fatal to the
process; the API layer turns each into an HTTP response.
"""
from typing import Any, Dict, List, Optional


class DirectoryError(Exception):
    """Base exception for all warehouse directory errors"""
    status_code = 400

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": self.message,
            "error_code": self.error_code,
        }


class ValidationError(DirectoryError):
    """Malformed or missing input; ``errors`` lists every offending field."""
    status_code = 422

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        fields = ", ".join(e["field"] for e in errors)
        super().__init__(message or f"Validation failed: {fields}", "VALIDATION_ERROR")
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        """Build from a ``pydantic.ValidationError``, keeping every field error."""
        errors = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err["loc"]) or "body"
            message = err["msg"]
            if message.startswith("Value error, "):
                message = message[len("Value error, "):]
            errors.append({"field": field, "message": message})
        return cls(errors)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["errors"] = self.errors
        return data


class NotFoundError(DirectoryError):
    """Unknown id, or an id owned by another account"""
    status_code = 404

    def __init__(self, resource_type: str, resource_id: Optional[str] = None):
        super().__init__(f"{resource_type} not found", "NOT_FOUND")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(DirectoryError):
    """Operation would break a directory invariant"""
    status_code = 409

    def __init__(self, message: str, resource_type: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFLICT_ERROR", details)
        self.resource_type = resource_type
