"""
SKILL.md formatter for Skilo.

Rewrites the frontmatter as canonical YAML and aligns markdown pipe tables
in the body. Content inside fenced code blocks is left untouched.
"""

import re
from dataclasses import dataclass
from pathlib import Path

import yaml

from skilo.config.schema import FmtConfig
from skilo.skills.models import Manifest
from skilo.skills.parser import parse_manifest

_SEPARATOR_CELL = re.compile(r"^\s*(:?)-+(:?)\s*$")
_FENCE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
MIN_COLUMN_WIDTH = 3


@dataclass
class FormatResult:
    """Original and formatted text of one manifest."""

    path: Path
    original: str
    formatted: str

    @property
    def changed(self) -> bool:
        return self.original != self.formatted


class Formatter:
    """Formats manifests according to FmtConfig."""

    def __init__(self, config: FmtConfig | None = None):
        self.config = config or FmtConfig()

    def format(self, manifest: Manifest) -> str:
        """Return the formatted SKILL.md text for a manifest."""
        key_order = None
        if not self.config.sort_frontmatter:
            raw = yaml.safe_load(manifest.frontmatter_raw)
            if isinstance(raw, dict):
                key_order = [str(key) for key in raw]

        frontmatter = manifest.frontmatter.to_yaml(key_order)
        body = format_tables(manifest.body) if self.config.format_tables else manifest.body
        return f"---\n{frontmatter}---\n\n{body}"

    def format_file(self, path: Path) -> FormatResult:
        """Parse and format a file without writing it.

        Raises:
            ManifestError: If the file cannot be parsed.
        """
        manifest = parse_manifest(path)
        original = path.read_text(encoding="utf-8")
        return FormatResult(path=path, original=original, formatted=self.format(manifest))


# =============================================================================
# Tables
# =============================================================================


def _split_row(line: str) -> list[str]:
    """Split a table row into trimmed cells, honoring escapes and code spans."""
    text = line.strip()
    if text.startswith("|"):
        text = text[1:]
    if text.endswith("|") and not text.endswith("\\|"):
        text = text[:-1]

    cells: list[str] = []
    current: list[str] = []
    in_code = False
    escaped = False
    for char in text:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            current.append(char)
            escaped = True
        elif char == "`":
            current.append(char)
            in_code = not in_code
        elif char == "|" and not in_code:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    cells.append("".join(current).strip())
    return cells


def _parse_alignments(line: str) -> list[str] | None:
    """Alignment per column for a separator row, or None if not a separator."""
    if "-" not in line:
        return None
    alignments = []
    for cell in _split_row(line):
        match = _SEPARATOR_CELL.match(cell)
        if not match:
            return None
        left, right = match.groups()
        if left and right:
            alignments.append("center")
        elif right:
            alignments.append("right")
        elif left:
            alignments.append("left")
        else:
            alignments.append("none")
    return alignments


def _is_table_line(line: str) -> bool:
    return "|" in line and not line.startswith(("    ", "\t")) and bool(line.strip())


def _pad(cell: str, width: int, alignment: str) -> str:
    if alignment == "right":
        return cell.rjust(width)
    if alignment == "center":
        padding = width - len(cell)
        left = padding // 2
        return " " * left + cell + " " * (padding - left)
    return cell.ljust(width)


def _separator(width: int, alignment: str) -> str:
    total = width + 2
    if alignment == "left":
        return ":" + "-" * (total - 1)
    if alignment == "right":
        return "-" * (total - 1) + ":"
    if alignment == "center":
        return ":" + "-" * (total - 2) + ":"
    return "-" * total


def render_table(rows: list[list[str]], alignments: list[str]) -> list[str]:
    """Render rows (header first) as aligned pipe-table lines."""
    columns = max(len(alignments), *(len(row) for row in rows))
    alignments = alignments + ["none"] * (columns - len(alignments))
    rows = [row + [""] * (columns - len(row)) for row in rows]

    widths = [
        max(MIN_COLUMN_WIDTH, *(len(row[i]) for row in rows))
        for i in range(columns)
    ]

    def render_row(row: list[str]) -> str:
        cells = (_pad(cell, widths[i], alignments[i]) for i, cell in enumerate(row))
        return "| " + " | ".join(cells) + " |"

    header, *body = rows
    separator = "|" + "|".join(_separator(widths[i], alignments[i]) for i in range(columns)) + "|"
    return [render_row(header), separator, *(render_row(row) for row in body)]


def format_tables(markdown: str) -> str:
    """Align every pipe table in ``markdown``; other lines are unchanged."""
    lines = markdown.split("\n")
    output: list[str] = []
    fence: str | None = None
    i = 0

    while i < len(lines):
        line = lines[i]

        fence_match = _FENCE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker[0]
            elif marker[0] == fence:
                fence = None
            output.append(line)
            i += 1
            continue

        if fence is None and _is_table_line(line) and i + 1 < len(lines):
            alignments = _parse_alignments(lines[i + 1])
            header = _split_row(line)
            if alignments is not None and len(alignments) == len(header):
                rows = [header]
                j = i + 2
                while j < len(lines) and _is_table_line(lines[j]):
                    rows.append(_split_row(lines[j]))
                    j += 1
                output.extend(render_table(rows, alignments))
                i = j
                continue

        output.append(line)
        i += 1

    return "\n".join(output)
