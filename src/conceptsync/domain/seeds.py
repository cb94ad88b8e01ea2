"""Read the seed list of concept identifiers."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from conceptsync.config.errors import SeedFileError

from .errors import SeedParseError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import ConceptId

log = getLogger(__name__)


def parse_seed_line(line: str, *, line_number: int) -> ConceptId:
    text = line.strip()
    try:
        return str(int(text))
    except ValueError:
        raise SeedParseError(line, line_number=line_number) from None


def parse_seed_lines(lines: Iterable[str]) -> list[ConceptId]:
    """Parse one integer identifier per line, skipping blank and malformed lines."""

    seeds: list[ConceptId] = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            seeds.append(parse_seed_line(line, line_number=line_number))
        except SeedParseError as exc:
            log.warning("%s", exc)
    return seeds


def read_seed_file(path: str | Path) -> list[ConceptId]:
    seed_path = Path(path)
    try:
        text = seed_path.read_text(encoding="ascii", errors="replace")
    except OSError as exc:
        raise SeedFileError(seed_path) from exc

    seeds = parse_seed_lines(text.splitlines())
    log.info("%s refers to %s concept(s): %s", seed_path, len(seeds), ", ".join(seeds))
    return seeds
