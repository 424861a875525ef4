# docsweep/errors.py
"""
Error taxonomy of the remote tree boundary.

None of these are fatal: each one is caught by the unit of work that produced
it and turned into an event plus a skip.
"""
from __future__ import annotations

from typing import Optional


class SweepError(Exception):
    """Base class for DocSweep errors."""


class RemoteError(SweepError):
    """A request to the content API failed."""

    operation: str = "request"
    reason: str = "remote"

    def __init__(self, path: str, message: str, status: Optional[int] = None) -> None:
        self.path = path
        self.status = status
        self.message = message
        super().__init__(f"{self.operation} {path} failed: {message}")


class ListFailure(RemoteError):
    """A folder could not be enumerated; its subtree is dropped."""

    operation = "list"


class FetchFailure(RemoteError):
    """A document source could not be retrieved; the file is skipped."""

    operation = "fetch"


class UndecodableSource(FetchFailure):
    """The source arrived but its bytes do not decode in the declared charset."""

    reason = "undecodable"


class PublishFailure(RemoteError):
    """A write-back was rejected; it is only reported."""

    operation = "publish"
