from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class RecordNotFoundError(AppError):
    """The store key disappeared between scan and fetch."""


class PayloadDecodeError(AppError):
    pass


class NotificationError(AppError):
    pass
