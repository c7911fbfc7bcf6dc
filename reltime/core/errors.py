"""Exceptions raised by reltime"""
from typing import Any


class ReltimeError(Exception):
    """Base class for reltime errors"""


class InvalidDateError(ReltimeError, ValueError):
    """Raised when a value cannot be interpreted as a point in time"""

    def __init__(self, value: Any, reason: str = "unparseable date"):
        self.value = value
        self.reason = reason
        super().__init__(f"{reason}: {value!r}")
