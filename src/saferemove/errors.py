"""Failure taxonomy seen by the retry core."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    TRANSIENT = "transient"
    FATAL = "fatal"
