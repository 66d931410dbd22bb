"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from hunkdiff.config import CONFIG_FILE, Settings, default_config_yaml, load_config
from hunkdiff.core.export import render_section, section_to_dict
from hunkdiff.core.models import FileDiffSection, SectionStatus
from hunkdiff.core.sections import build_section, expand_all, split_lines


logger = logging.getLogger(__name__)

# diff(1) convention: 0 identical, 1 different, 2 trouble
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 2."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(EXIT_ERROR)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and apply its log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail("Invalid configuration", e)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _read_lines(path: Path) -> list[str]:
    try:
        return split_lines(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError:
        _fail(f"{path} is not a UTF-8 text file")
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def _section(old: str, new: str, context_size: int) -> FileDiffSection:
    old_lines, new_lines = _read_lines(Path(old)), _read_lines(Path(new))
    logger.info("Comparing %s (%d lines) with %s (%d lines)", old, len(old_lines), new, len(new_lines))
    return build_section(f"{old} -> {new}", old_lines, new_lines, context_size)


def _tree_sections(old: Path, new: Path, context_size: int) -> list[FileDiffSection]:
    """One section per file path found under either directory; unchanged files are left out."""
    names = sorted(
        {p.relative_to(old).as_posix() for p in old.rglob("*") if p.is_file()}
        | {p.relative_to(new).as_posix() for p in new.rglob("*") if p.is_file()}
    )
    sections = []
    for name in names:
        old_path, new_path = old / name, new / name
        old_lines = _read_lines(old_path) if old_path.is_file() else []
        new_lines = _read_lines(new_path) if new_path.is_file() else []
        section = build_section(name, old_lines, new_lines, context_size)
        if section.status != SectionStatus.unchanged:
            sections.append(section)
    logger.info("Compared %d files under %s and %s; %d differ", len(names), old, new, len(sections))
    return sections


def _sections(old: str, new: str, context_size: int) -> list[FileDiffSection]:
    old_path, new_path = Path(old), Path(new)
    if old_path.is_dir() != new_path.is_dir():
        _fail(f"Cannot compare a directory with a file: {old}, {new}")
    if old_path.is_dir():
        return _tree_sections(old_path, new_path, context_size)
    return [_section(old, new, context_size)]


def diff_cmd(
    old: Annotated[str, typer.Argument(help="Original file or directory")],
    new: Annotated[str, typer.Argument(help="New file or directory")],
    context: Annotated[Optional[int], typer.Option("--context", "-c", help="Context lines around each change")] = None,
    step: Annotated[Optional[int], typer.Option("--expand-step", help="Lines revealed per expansion")] = None,
    rounds: Annotated[int, typer.Option("--expand", min=0, help="Expansion rounds applied to every hunk")] = 0,
    as_json: Annotated[bool, typer.Option("--json", help="Print the section(s) as JSON")] = False,
    ):
    """Show the hunks that differ between OLD and NEW. Exit 1 when they differ.

    With two directories, every file under either one is compared by relative path.
    """
    settings = _settings(overrides={"context_size": context, "expand_step": step})
    sections = _sections(old, new, settings.context_size)
    for _ in range(rounds):
        sections = [expand_all(section, settings.expand_step) for section in sections]

    if as_json:
        data = [section_to_dict(section) for section in sections]
        typer.echo(json.dumps(data if Path(old).is_dir() else data[0], indent=2))
    else:
        for section in sections:
            for line in render_section(section):
                typer.echo(line)

    if any(section.has_changes for section in sections):
        raise typer.Exit(EXIT_DIFFERENT)


def summary_cmd(
    old: Annotated[str, typer.Argument(help="Original file or directory")],
    new: Annotated[str, typer.Argument(help="New file or directory")],
    ):
    """Print the status and +added -removed line counts for OLD vs NEW."""
    settings = _settings()
    if not Path(old).is_dir():
        section = _section(old, new, settings.context_size)
        typer.echo(f"{section.status.value} +{section.added_lines} -{section.removed_lines}")
        return

    sections = _sections(old, new, settings.context_size)
    for section in sections:
        typer.echo(f"{section.name}: {section.status.value} +{section.added_lines} -{section.removed_lines}")
    added, removed = sum(s.added_lines for s in sections), sum(s.removed_lines for s in sections)
    typer.echo(f"{len(sections)} changed, +{added} -{removed}")


def init_cmd(
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing config file")] = False,
    ):
    """Write a default config.yaml in the current directory."""
    path = Path(CONFIG_FILE)
    if path.exists() and not force:
        _fail(f"{CONFIG_FILE} already exists; use --force to overwrite")
    path.write_text(default_config_yaml())
    typer.echo(f"Wrote default settings to {path}")
