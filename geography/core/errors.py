"""Error taxonomy shared by the importers, the directory services and the APIs."""

from __future__ import annotations


class GeographyError(Exception):
    """Base class; ``code`` and ``status_code`` describe the error to API callers."""

    code = "geography_error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(GeographyError):
    """A single field failed its format or range check."""

    code = "invalid_parameter"
    status_code = 400

    def __init__(self, kind: str, value: str | None = None, column: str | None = None) -> None:
        super().__init__(f"Invalid {kind}")
        self.kind = kind
        self.value = value
        self.column = column


class NotFoundError(GeographyError):
    code = "not_found"
    status_code = 404

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class TooManyResultsError(GeographyError):
    """A range query matched more rows than the configured ceiling."""

    code = "too_many_results"
    status_code = 422

    def __init__(self, limit: int) -> None:
        super().__init__(f"Too many results (more than {limit})")
        self.limit = limit


class ResolutionError(GeographyError):
    """An imported row references a parent entity that does not exist."""

    code = "unresolved_reference"
    status_code = 422

    def __init__(self, entity: str, value: str, column: str | None = None) -> None:
        super().__init__(f"{entity} {value!r} not found")
        self.entity = entity
        self.value = value
        self.column = column


class SourceError(GeographyError):
    """A CSV source could not be opened, downloaded or its header read."""

    code = "source_unavailable"
    status_code = 503


__all__ = [
    "GeographyError",
    "ValidationError",
    "NotFoundError",
    "TooManyResultsError",
    "ResolutionError",
    "SourceError",
]
