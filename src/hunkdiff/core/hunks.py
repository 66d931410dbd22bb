"""Grouping of aligned operations into context-padded hunks"""

import logging
from typing import Sequence

from hunkdiff.core.align import align
from hunkdiff.core.models import ChangeKind, Hunk, LineChange


logger = logging.getLogger(__name__)


def _offsets(aligned: Sequence[LineChange]) -> tuple[list[int], list[int]]:
    """0-based old/new line offsets before each operation, plus the final totals."""
    old_pos, new_pos = [0], [0]
    for change in aligned:
        old_pos.append(old_pos[-1] + (change.kind != ChangeKind.add))
        new_pos.append(new_pos[-1] + (change.kind != ChangeKind.remove))
    return old_pos, new_pos


def _change_runs(aligned: Sequence[LineChange]) -> list[tuple[int, int]]:
    """Half-open [start, end) index ranges of maximal add/remove runs."""
    runs: list[tuple[int, int]] = []
    start = None
    for idx, change in enumerate(aligned):
        if change.is_change:
            if start is None:
                start = idx
        elif start is not None:
            runs.append((start, idx))
            start = None
    if start is not None:
        runs.append((start, len(aligned)))
    return runs


def _group_runs(runs: list[tuple[int, int]], context_size: int) -> list[tuple[int, int]]:
    """Join runs whose padded windows would overlap or touch."""
    groups: list[tuple[int, int]] = []
    for start, end in runs:
        if groups and start - groups[-1][1] <= 2 * context_size:
            groups[-1] = (groups[-1][0], end)
        else:
            groups.append((start, end))
    return groups


def extract_hunks(aligned: Sequence[LineChange], context_size: int) -> list[Hunk]:
    """Partition aligned operations into hunks with up to context_size lines of context per side.

    Change runs separated by at most 2 * context_size matches share one hunk, so
    no two returned hunks have overlapping or touching visible windows. Returns
    an empty list when there are no changes.
    """
    if context_size < 0:
        raise ValueError(f"context_size must be >= 0, got {context_size}")

    aligned = list(aligned)
    old_pos, new_pos = _offsets(aligned)
    total_old = old_pos[-1]
    hunks = []

    for start, end in _group_runs(_change_runs(aligned), context_size):
        lo = max(0, start - context_size)
        hi = min(len(aligned), end + context_size)
        hunks.append(Hunk(
            start_old_line=old_pos[start],
            start_new_line=new_pos[start],
            changes=tuple(aligned[lo:hi]),
            visible_start_old=old_pos[lo],
            visible_start_new=new_pos[lo],
            visible_end_old=old_pos[hi],
            visible_end_new=new_pos[hi],
            can_expand_before=old_pos[lo] > 0,
            can_expand_after=old_pos[hi] < total_old,
        ))

    logger.debug("Extracted %d hunk(s) from %d operations", len(hunks), len(aligned))
    return hunks


def diff_to_hunks(old_lines: Sequence[str], new_lines: Sequence[str], context_size: int = 3) -> list[Hunk]:
    """Align two line sequences and group the result into hunks."""
    return extract_hunks(align(old_lines, new_lines), context_size)
