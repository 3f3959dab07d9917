"""
document/ids.py - Identifier and clock capabilities

Document operations never call uuid or datetime directly; they receive
these capabilities so tests can make documents fully deterministic.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional
import itertools
import uuid

__all__ = [
    'IdGenerator',
    'UuidIdGenerator',
    'SequentialIdGenerator',
    'Clock',
    'SystemClock',
    'FixedClock',
    'StepClock',
]


class IdGenerator(ABC):
    """Source of fresh identifiers."""

    @abstractmethod
    def new_id(self) -> str:
        ...


class UuidIdGenerator(IdGenerator):
    """Random ids such as ``tab-3f2a9c0b1d4e``."""

    def __init__(self, prefix: str):
        self.prefix = prefix

    def new_id(self) -> str:
        return f"{self.prefix}-{uuid.uuid4().hex[:12]}"


class SequentialIdGenerator(IdGenerator):
    """Deterministic ids: ``tab-1``, ``tab-2``, ..."""

    def __init__(self, prefix: str, start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def new_id(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


class Clock(ABC):
    """Source of timezone-aware 'now'."""

    @abstractmethod
    def now(self) -> datetime:
        ...


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Always returns the same instant."""

    def __init__(self, instant: Optional[datetime] = None):
        self.instant = instant or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.instant


class StepClock(Clock):
    """Advances by a fixed step on every call, so updates are observable."""

    def __init__(self, start: Optional[datetime] = None, step: timedelta = timedelta(seconds=1)):
        self._current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.step = step

    def now(self) -> datetime:
        value = self._current
        self._current = self._current + self.step
        return value
