"""
Failures raised by the search client.

Callers normally only care about ``SearchError``; the subclasses exist so
that the message shown to the user can say what went wrong.
"""

from typing import Optional


class SearchError(Exception):
    """A search request did not produce a usable page of results."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NetworkError(SearchError):
    """The request could not be sent or the connection failed."""


class HttpError(SearchError):
    """The backend answered with a non-success status code."""

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        super().__init__(message or f"HTTP error! status: {status_code}")
        self.status_code = status_code


class ParseError(SearchError):
    """The response body does not look like a search result."""
