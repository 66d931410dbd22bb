"""Progressive context expansion of hunks, merging neighbours whose windows meet"""

import logging
from typing import Sequence

from hunkdiff.core.models import ChangeKind, DiffConsistencyError, Direction, Hunk, LineChange


logger = logging.getLogger(__name__)


def _context(
    original_lines: Sequence[str],
    new_lines: Sequence[str],
    old_start: int,
    old_end: int,
    new_start: int,
    ) -> tuple[LineChange, ...]:
    """Match operations for original_lines[old_start:old_end], paired with new_lines from new_start."""
    count = old_end - old_start
    if count < 0 or old_start < 0 or new_start < 0 \
            or old_end > len(original_lines) or new_start + count > len(new_lines):
        raise DiffConsistencyError(
            f"Context range old[{old_start}:{old_end}] new[{new_start}:{new_start + count}] "
            f"is outside the line arrays ({len(original_lines)} old, {len(new_lines)} new)"
        )

    lines = []
    for offset in range(count):
        i, j = old_start + offset, new_start + offset
        if original_lines[i] != new_lines[j]:
            raise DiffConsistencyError(f"Old line {i + 1} and new line {j + 1} differ but lie outside any hunk")
        lines.append(LineChange(kind=ChangeKind.match, value=original_lines[i],
                                old_line_number=i + 1, new_line_number=j + 1))
    return tuple(lines)


def _merge(earlier: Hunk, later: Hunk, original_lines: Sequence[str], new_lines: Sequence[str]) -> Hunk:
    """Join two adjacent hunks and the unchanged lines between their windows."""
    gap_old = later.visible_start_old - earlier.visible_end_old
    gap_new = later.visible_start_new - earlier.visible_end_new
    if gap_old != gap_new:
        raise DiffConsistencyError(
            f"Gap between hunks spans {gap_old} old and {gap_new} new lines; expected equal"
        )
    gap = _context(original_lines, new_lines, earlier.visible_end_old, later.visible_start_old,
                   earlier.visible_end_new)
    return Hunk(
        start_old_line=earlier.start_old_line,
        start_new_line=earlier.start_new_line,
        changes=earlier.changes + gap + later.changes,
        visible_start_old=earlier.visible_start_old,
        visible_start_new=earlier.visible_start_new,
        visible_end_old=later.visible_end_old,
        visible_end_new=later.visible_end_new,
        can_expand_before=earlier.can_expand_before,
        can_expand_after=later.can_expand_after,
    )


def _expand_before(hunks: list[Hunk], index: int, original_lines, new_lines, step: int) -> list[Hunk]:
    hunk = hunks[index]
    target = max(0, hunk.visible_start_old - step)

    if index > 0 and target <= hunks[index - 1].visible_end_old:
        merged = _merge(hunks[index - 1], hunk, original_lines, new_lines)
        logger.debug("Merged hunk %d into preceding hunk %d", index, index - 1)
        return hunks[:index - 1] + [merged] + hunks[index + 1:]

    count = hunk.visible_start_old - target
    new_target = hunk.visible_start_new - count
    if target == 0 and new_target != 0:
        raise DiffConsistencyError(
            f"First hunk starts at old line {hunk.visible_start_old} but new line {hunk.visible_start_new}"
        )
    revealed = _context(original_lines, new_lines, target, hunk.visible_start_old, new_target)
    hunks[index] = hunk.model_copy(update={
        "changes": revealed + hunk.changes,
        "visible_start_old": target,
        "visible_start_new": new_target,
        "can_expand_before": target > 0,
    })
    return hunks


def _expand_after(hunks: list[Hunk], index: int, original_lines, new_lines, step: int) -> list[Hunk]:
    hunk = hunks[index]
    target = min(len(original_lines), hunk.visible_end_old + step)

    if index < len(hunks) - 1 and target >= hunks[index + 1].visible_start_old:
        merged = _merge(hunk, hunks[index + 1], original_lines, new_lines)
        logger.debug("Merged hunk %d into following hunk %d", index, index + 1)
        return hunks[:index] + [merged] + hunks[index + 2:]

    count = target - hunk.visible_end_old
    new_target = hunk.visible_end_new + count
    if target == len(original_lines) and new_target != len(new_lines):
        raise DiffConsistencyError(
            f"Last hunk leaves {len(original_lines) - hunk.visible_end_old} old but "
            f"{len(new_lines) - hunk.visible_end_new} new trailing lines"
        )
    revealed = _context(original_lines, new_lines, hunk.visible_end_old, target, hunk.visible_end_new)
    hunks[index] = hunk.model_copy(update={
        "changes": hunk.changes + revealed,
        "visible_end_old": target,
        "visible_end_new": new_target,
        "can_expand_after": target < len(original_lines),
    })
    return hunks


def expand(
    hunks: Sequence[Hunk],
    index: int,
    direction: Direction,
    original_lines: Sequence[str],
    new_lines: Sequence[str],
    step: int = 10,
    ) -> list[Hunk]:
    """Reveal up to step more context lines on one edge of hunks[index].

    Returns a new list; the input list and its hunks are left untouched. When
    the grown window reaches or passes the neighbouring hunk's window, the two
    hunks and the lines between them become one hunk and the list shrinks by
    one. Expanding an edge whose can_expand flag is already false is a no-op.

    original_lines and new_lines must be the arrays the hunks were computed
    from. Raises IndexError for a bad index, ValueError for a negative step and
    DiffConsistencyError when the arrays disagree with the hunk offsets.
    """
    hunks = list(hunks)
    if not 0 <= index < len(hunks):
        raise IndexError(f"Hunk index {index} out of range for {len(hunks)} hunk(s)")
    if step < 0:
        raise ValueError(f"step must be >= 0, got {step}")

    direction = Direction(direction)
    if direction == Direction.before:
        if not hunks[index].can_expand_before:
            return hunks
        return _expand_before(hunks, index, original_lines, new_lines, step)

    if not hunks[index].can_expand_after:
        return hunks
    return _expand_after(hunks, index, original_lines, new_lines, step)
