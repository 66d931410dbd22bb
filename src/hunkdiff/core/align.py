"""Line alignment of two documents via longest common subsequence"""

import logging
from typing import Sequence

from hunkdiff.core.models import ChangeKind, LineChange


logger = logging.getLogger(__name__)


def _lcs_table(a: Sequence[str], b: Sequence[str]) -> list[list[int]]:
    """Prefix LCS lengths: table[i][j] is the LCS length of a[:i] and b[:j]."""
    table = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i, line in enumerate(a, 1):
        row, above = table[i], table[i - 1]
        for j, other in enumerate(b, 1):
            if line == other:
                row[j] = above[j - 1] + 1
            else:
                row[j] = max(row[j - 1], above[j])
    return table


def _common_lines(old: Sequence[str], new: Sequence[str]) -> list[str]:
    """Backtrack the table into the common subsequence, stepping the old side on ties."""
    table = _lcs_table(old, new)
    common = []
    i, j = len(old), len(new)
    while i > 0 and j > 0:
        if old[i - 1] == new[j - 1]:
            common.append(old[i - 1])
            i, j = i - 1, j - 1
        elif table[i][j - 1] > table[i - 1][j]:
            j -= 1
        else:
            i -= 1
    common.reverse()
    return common


def lcs_length(old_lines: Sequence[str], new_lines: Sequence[str]) -> int:
    """Length of the longest common subsequence of two line sequences."""
    return _lcs_table(old_lines, new_lines)[-1][-1]


def align(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[LineChange]:
    """Align two line sequences into ordered match/add/remove operations.

    The common subsequence comes from backtracking the LCS table from the end
    of both documents, consuming the old-side line whenever either step keeps
    the LCS optimal. Both documents are then walked forward against it: a line
    is matched at its earliest position on each side, and between two matches
    every remove is emitted before any add.
    """
    old, new = list(old_lines), list(new_lines)
    common = _common_lines(old, new)
    logger.debug("LCS of %d and %d lines has %d lines", len(old), len(new), len(common))

    changes = []
    i = j = k = 0
    while i < len(old) or j < len(new):
        pending = common[k] if k < len(common) else None
        if i < len(old) and j < len(new) and old[i] == pending and new[j] == pending:
            changes.append(LineChange(kind=ChangeKind.match, value=old[i], old_line_number=i + 1, new_line_number=j + 1))
            i, j, k = i + 1, j + 1, k + 1
        elif i < len(old) and old[i] != pending:
            changes.append(LineChange(kind=ChangeKind.remove, value=old[i], old_line_number=i + 1))
            i += 1
        else:
            changes.append(LineChange(kind=ChangeKind.add, value=new[j], new_line_number=j + 1))
            j += 1
    return changes
