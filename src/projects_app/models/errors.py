# projects_app error types
# Rev 0.1.0

from __future__ import annotations


class DbError(Exception):
    """The single failure kind: SQL, parse, not-found and validation errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message
