"""CSV import for uxrank.

Converts the upstream design CSV files into the JSON collection files the
store loads. Run once per data update.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path

from uxrank.exceptions import ConvertError

__all__ = ["DEFAULT_FILES", "convert_directory", "convert_file", "parse_csv"]

logger = logging.getLogger(__name__)

DEFAULT_FILES: tuple[str, ...] = (
    "styles.csv",
    "colors.csv",
    "typography.csv",
    "products.csv",
    "landing.csv",
    "ux-guidelines.csv",
    "ui-reasoning.csv",
)


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text into rows keyed by the header.

    Handles quoted fields, ``""`` escapes and newlines inside quotes.
    Fields are stripped. Short rows are padded with ``""``, extra cells are
    dropped, blank lines are skipped.
    """
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    headers: list[str] | None = None
    rows: list[dict[str, str]] = []

    for record in reader:
        cells = [cell.strip() for cell in record]
        if not any(cells):
            continue
        if headers is None:
            headers = cells
            continue
        padded = cells + [""] * (len(headers) - len(cells))
        rows.append(dict(zip(headers, padded)))

    return rows


def convert_file(src: Path, dest: Path) -> int:
    """Convert one CSV file to a JSON array file.

    Returns:
        Number of rows written.

    Raises:
        ConvertError: If reading, parsing or writing fails.
    """
    try:
        rows = parse_csv(src.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        logger.error("Failed to read %s: %s", src, e)
        raise ConvertError(f"Failed to read {src}: {e}") from e

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(json.dumps(rows, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write %s: %s", dest, e)
        raise ConvertError(f"Failed to write {dest}: {e}") from e

    logger.info("Converted %s -> %s (%d rows)", src.name, dest.name, len(rows))
    return len(rows)


def convert_directory(
    src_dir: Path,
    dest_dir: Path,
    filenames: tuple[str, ...] = DEFAULT_FILES,
) -> dict[Path, int]:
    """Convert the known CSV files in ``src_dir`` into ``dest_dir``.

    Missing source files are skipped with a warning.

    Returns:
        Row count per written JSON file.
    """
    if not src_dir.is_dir():
        raise ConvertError(f"Source directory not found: {src_dir}")

    written: dict[Path, int] = {}
    for name in filenames:
        src = src_dir / name
        if not src.exists():
            logger.warning("Skipped (not found): %s", src)
            continue
        dest = dest_dir / (Path(name).stem + ".json")
        written[dest] = convert_file(src, dest)
    return written
