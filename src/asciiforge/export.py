"""Writing rendered art to disk and reading it back.

Bare file names land in the configured export directory; names
without an extension get a unique suffix so repeated exports never
collide.  Paths containing a directory are used as given.
"""

from __future__ import annotations

import html
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from asciiforge.config.settings import settings
from asciiforge.errors import ConfigurationError, ExportError
from asciiforge.grid import Grid

logger = logging.getLogger(__name__)


def resolve_export_path(file_name: str | Path) -> Path:
    """Map a user-supplied name to the path that will be written."""
    path = Path(file_name)
    if path.parent != Path("."):
        return path

    directory = settings.export.directory
    if path.suffix:
        return directory / path.name
    return directory / f"{path.name}{uuid.uuid4()}{settings.export.extension}"


def export_text(text: str, file_name: str | Path, append: bool = False) -> Path:
    """Write *text* and return the path written.

    With *append* and an existing file, the text is added after a
    newline instead of replacing the file.  The name is resolved with
    :func:`resolve_export_path` first, so ``art.txt`` appends to the
    copy in the export directory.
    """
    path = resolve_export_path(file_name)
    if path.is_dir():
        raise ExportError(f"{path} is a directory, not a file")

    try:
        if append and path.is_file():
            with path.open("a", encoding="utf-8") as fh:
                fh.write("\n" + text)
            logger.info("Appended %d characters to %s", len(text), path)
            return path

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except PermissionError as exc:
        raise ExportError(f"Permission denied: cannot write to {file_name}") from exc
    except OSError as exc:
        raise ExportError(f"Failed to write {file_name}: {exc}") from exc

    logger.info("Wrote %s", path)
    return path


def import_grid(file_path: str | Path) -> Grid:
    """Read a text file into a :class:`Grid`.

    A single trailing newline is ignored; an empty or whitespace-only
    file is rejected.
    """
    path = Path(file_path)
    if not path.exists():
        raise ExportError(f"File not found: {path}")
    if path.is_dir():
        raise ExportError(f"{path} is a directory, not a file")

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as exc:
        raise ExportError(f"Permission denied: cannot read {path}") from exc
    except OSError as exc:
        raise ExportError(f"Failed to read {path}: {exc}") from exc

    if not content.strip():
        raise ExportError(f"File is empty: {path}")
    if content.endswith("\n"):
        content = content[:-1]
    try:
        return Grid.from_string(content)
    except ConfigurationError as exc:
        raise ExportError(f"Cannot parse {path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------


def grid_to_json(grid: Grid, metadata: dict[str, Any] | None = None) -> str:
    """JSON document with the metadata, the cell rows and a UTC timestamp."""
    document = {
        **(metadata or {}),
        "width": grid.width,
        "height": grid.height,
        "grid": grid.to_list(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    return json.dumps(document, indent=2)


def grid_to_html(grid: Grid) -> str:
    """One ``<span>`` per cell, ``<br>`` after every row."""
    return "".join(
        "".join(f"<span>{html.escape(char)}</span>" for char in row) + "<br>"
        for row in grid.to_list()
    )
