"""Plain-text and JSON-ready export of diff sections"""

from typing import Any

from hunkdiff.core.models import ChangeKind, FileDiffSection, Hunk


_PREFIX = {ChangeKind.match: " ", ChangeKind.add: "+", ChangeKind.remove: "-"}


def _range(start: int, end: int) -> str:
    """Unified-diff range: 1-based start, or the preceding line when the range is empty."""
    count = end - start
    return f"{start + 1 if count else start},{count}"


def hunk_header(hunk: Hunk) -> str:
    return (
        f"@@ -{_range(hunk.visible_start_old, hunk.visible_end_old)} "
        f"+{_range(hunk.visible_start_new, hunk.visible_end_new)} @@"
    )


def render_hunk(hunk: Hunk) -> list[str]:
    """Header line followed by one prefixed line per visible operation."""
    return [hunk_header(hunk)] + [f"{_PREFIX[c.kind]}{c.value}" for c in hunk.changes]


def render_section(section: FileDiffSection) -> list[str]:
    lines = [f"{section.name} ({section.status.value}) +{section.added_lines} -{section.removed_lines}"]
    for hunk in section.hunks:
        lines.extend(render_hunk(hunk))
    return lines


def section_to_dict(section: FileDiffSection, include_lines: bool = False) -> dict[str, Any]:
    """JSON-ready dict of a section with its counters; source line arrays only if include_lines."""
    exclude = None if include_lines else {"original_lines", "new_lines"}
    data = section.model_dump(mode="json", exclude=exclude)
    data["added_lines"] = section.added_lines
    data["removed_lines"] = section.removed_lines
    return data
