"""Error types surfaced by the request layer."""

from __future__ import annotations

from pydantic import ValidationError


class HabitualError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class NotFoundError(HabitualError):
    """A referenced habit (or completion) does not exist."""

    status_code = 404


class ValidationFailed(HabitualError):
    """Request payload failed schema validation."""

    status_code = 400

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or {}

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "ValidationFailed":
        """Collapse pydantic errors into a ``{field: [messages]}`` mapping."""

        structured: dict[str, list[str]] = {}
        for error in exc.errors(include_url=False):
            loc = error.get("loc", ())
            key = ".".join(str(part) for part in loc) if loc else "__root__"
            structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
        summary = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in structured.items()
        )
        return cls(f"Validation error: {summary}", structured)

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


__all__ = ["HabitualError", "NotFoundError", "ValidationFailed"]
