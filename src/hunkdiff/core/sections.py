"""Per-document diff sections: line splitting, status, counters, and section-level expansion"""

from typing import Sequence

from hunkdiff.core.expand import expand
from hunkdiff.core.hunks import diff_to_hunks
from hunkdiff.core.models import Direction, FileDiffSection, Hunk, SectionStatus


def split_lines(text: str) -> list[str]:
    """Split on '\\n'. A single trailing newline does not add an empty last line; '' gives [].

    Unlike a bare str.split, a newline-terminated file does not gain a phantom
    empty line, and an empty file has no lines rather than one empty line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def count_changes(hunks: Sequence[Hunk]) -> tuple[int, int]:
    """Return (added, removed) line totals across hunks."""
    return sum(h.added_lines for h in hunks), sum(h.removed_lines for h in hunks)


def section_status(old_lines: Sequence[str], new_lines: Sequence[str], hunks: Sequence[Hunk]) -> SectionStatus:
    if not old_lines and new_lines:
        return SectionStatus.created
    if old_lines and not new_lines:
        return SectionStatus.deleted
    return SectionStatus.modified if hunks else SectionStatus.unchanged


def build_section(
    name: str,
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    context_size: int = 3,
    ) -> FileDiffSection:
    """Diff two line sequences into a section that keeps both arrays for later expansion."""
    old_lines, new_lines = tuple(old_lines), tuple(new_lines)
    hunks = diff_to_hunks(old_lines, new_lines, context_size)
    return FileDiffSection(
        name=name,
        status=section_status(old_lines, new_lines, hunks),
        hunks=tuple(hunks),
        original_lines=old_lines,
        new_lines=new_lines,
    )


def build_text_section(name: str, old_text: str, new_text: str, context_size: int = 3) -> FileDiffSection:
    return build_section(name, split_lines(old_text), split_lines(new_text), context_size)


def expand_section(section: FileDiffSection, index: int, direction: Direction, step: int = 10) -> FileDiffSection:
    """Expand one hunk edge of a section; returns a new section."""
    hunks = expand(section.hunks, index, direction, section.original_lines, section.new_lines, step)
    return section.model_copy(update={"hunks": tuple(hunks)})


def expand_all(section: FileDiffSection, step: int = 10) -> FileDiffSection:
    """Expand both edges of every hunk by one step, merging hunks whose windows meet.

    Trailing edges are processed last-to-first so a merge never shifts an index
    still to be visited; leading edges first-to-last, staying on the same index
    after a merge folds the current hunk into its predecessor.
    """
    idx = len(section.hunks) - 1
    while idx >= 0:
        section = expand_section(section, idx, Direction.after, step)
        idx -= 1

    idx = 0
    while idx < len(section.hunks):
        count = len(section.hunks)
        section = expand_section(section, idx, Direction.before, step)
        if len(section.hunks) == count:
            idx += 1
    return section
