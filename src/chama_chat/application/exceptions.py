from __future__ import annotations


class AppError(Exception):
    """Base application error. ``detail`` is safe to show to the client."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    pass


class ForbiddenError(AppError):
    pass


class ValidationError(AppError):
    pass


class ServiceUnavailableError(AppError):
    """A backing store failed; the operation was aborted."""
