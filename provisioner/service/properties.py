"""Reader for ``key=value`` properties files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

COMMENT_PREFIXES = ("#", "!")


def _logical_lines(text: str) -> List[str]:
    lines: List[str] = []
    pending = ""
    for raw_line in text.splitlines():
        line = raw_line.strip() if not pending else raw_line.lstrip()
        if not pending and (not line or line.startswith(COMMENT_PREFIXES)):
            continue
        if line.endswith("\\") and not line.endswith("\\\\"):
            pending += line[:-1]
            continue
        lines.append(pending + line)
        pending = ""
    if pending:
        lines.append(pending)
    return lines


def parse_properties(text: str) -> Dict[str, str]:
    """Parse properties text; the first ``=`` or ``:`` separates key and value."""
    result: Dict[str, str] = {}
    for line in _logical_lines(text):
        positions = [idx for idx in (line.find("="), line.find(":")) if idx >= 0]
        if not positions:
            result[line.strip()] = ""
            continue
        idx = min(positions)
        result[line[:idx].strip()] = line[idx + 1:].strip()
    return result


def read_properties(path: Path) -> Dict[str, str]:
    return parse_properties(Path(path).read_text(encoding="utf-8", errors="ignore"))
