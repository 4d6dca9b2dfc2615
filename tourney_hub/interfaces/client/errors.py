"""Errors raised by the notification client."""

from __future__ import annotations


class NotificationClientError(Exception):
    """Base class for failures talking to the notification API."""


class ClientTransportError(NotificationClientError):
    """The request never produced an HTTP response (DNS, connect, timeout...)."""


class ClientResponseError(NotificationClientError):
    """The API answered with a non-success status code."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


__all__ = ["NotificationClientError", "ClientTransportError", "ClientResponseError"]
