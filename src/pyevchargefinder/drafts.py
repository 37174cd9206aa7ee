"""Staged edits of immutable settings.

Editors change a draft copy; the committed value only changes on
``confirm`` and ``cancel`` throws the draft away.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Generic, TypeVar

from .exceptions import ValidationError

T = TypeVar("T")


class Draft(Generic[T]):
    def __init__(self, committed: T) -> None:
        self._committed = committed
        self._draft: T | None = None

    @property
    def committed(self) -> T:
        return self._committed

    @property
    def draft(self) -> T | None:
        return self._draft

    @property
    def editing(self) -> bool:
        return self._draft is not None

    def begin(self) -> T:
        self._draft = self._committed
        return self._draft

    def update(self, **changes: Any) -> T:
        if self._draft is None:
            raise ValidationError("No edit in progress.")
        self._draft = replace(self._draft, **changes)
        return self._draft

    def confirm(self) -> T:
        if self._draft is None:
            raise ValidationError("No edit in progress.")
        self._committed, self._draft = self._draft, None
        return self._committed

    def cancel(self) -> T:
        self._draft = None
        return self._committed
