"""Diff data models: aligned line operations, hunks, and per-document sections"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class ChangeKind(str, Enum):
    match = "match"
    add = "add"
    remove = "remove"


class Direction(str, Enum):
    before = "before"
    after = "after"


class SectionStatus(str, Enum):
    created = "created"
    modified = "modified"
    deleted = "deleted"
    unchanged = "unchanged"


class DiffConsistencyError(ValueError):
    """Line arrays do not agree with the offsets stored on a hunk list."""


class LineChange(BaseModel):
    """One aligned operation; line numbers are 1-based."""
    model_config = ConfigDict(frozen=True)

    kind: ChangeKind
    value: str
    old_line_number: Optional[int] = None     # None for add
    new_line_number: Optional[int] = None     # None for remove

    @model_validator(mode="after")
    def _check_line_numbers(self) -> "LineChange":
        has_old = self.old_line_number is not None
        has_new = self.new_line_number is not None
        expected = {
            ChangeKind.match: (True, True),
            ChangeKind.add: (False, True),
            ChangeKind.remove: (True, False),
        }[self.kind]
        if (has_old, has_new) != expected:
            raise ValueError(
                f"{self.kind.value} line needs old={expected[0]} new={expected[1]} line numbers"
            )
        return self

    @property
    def is_change(self) -> bool:
        return self.kind != ChangeKind.match


class Hunk(BaseModel):
    """A change region plus its currently visible context.

    All offsets are 0-based indexes into the original line arrays; the
    visible window is half-open, [visible_start, visible_end). `changes`
    holds exactly the operations inside the visible window.
    """
    model_config = ConfigDict(frozen=True)

    start_old_line: int
    start_new_line: int
    changes: tuple[LineChange, ...]
    visible_start_old: int
    visible_start_new: int
    visible_end_old: int
    visible_end_new: int
    can_expand_before: bool
    can_expand_after: bool

    @property
    def added_lines(self) -> int:
        return sum(1 for c in self.changes if c.kind == ChangeKind.add)

    @property
    def removed_lines(self) -> int:
        return sum(1 for c in self.changes if c.kind == ChangeKind.remove)


class FileDiffSection(BaseModel):
    """Hunks for one document, kept together with the two line arrays they index into."""
    model_config = ConfigDict(frozen=True)

    name: str
    status: SectionStatus
    hunks: tuple[Hunk, ...] = ()
    original_lines: tuple[str, ...] = ()
    new_lines: tuple[str, ...] = ()

    @property
    def added_lines(self) -> int:
        return sum(h.added_lines for h in self.hunks)

    @property
    def removed_lines(self) -> int:
        return sum(h.removed_lines for h in self.hunks)

    @property
    def has_changes(self) -> bool:
        return bool(self.hunks)
