"""
Line-level edits to shell start-up files.
"""

import logging
from pathlib import Path
from typing import Iterable, List


logger = logging.getLogger(__name__)

# Bytes that are not UTF-8 pass through unchanged
RC_ENCODING = {"encoding": "utf-8", "errors": "surrogateescape"}


def append_lines(rc_file: Path, lines: Iterable[str]) -> List[str]:
    """
    Append ``lines`` to ``rc_file``, skipping any line already present.

    Returns:
        The lines that were actually written
    """
    content = rc_file.read_text(**RC_ENCODING) if rc_file.exists() else ""
    existing = content.splitlines()
    to_add = [line for line in lines if line not in existing]
    if not to_add:
        logger.debug(f"{rc_file} already contains all lines")
        return []

    rc_file.parent.mkdir(parents=True, exist_ok=True)
    with open(rc_file, "a", **RC_ENCODING) as f:
        if content and not content.endswith("\n"):
            f.write("\n")
        for line in to_add:
            f.write(line + "\n")
    logger.info(f"Appended {len(to_add)} line(s) to {rc_file}")
    return to_add


def strip_lines(rc_file: Path, markers: Iterable[str]) -> int:
    """
    Remove every line of ``rc_file`` containing any of ``markers``.

    Returns:
        Number of lines removed; 0 if the file does not exist
    """
    if not rc_file.exists():
        return 0

    markers = list(markers)
    content = rc_file.read_text(**RC_ENCODING)
    kept = []
    removed = 0
    for line in content.splitlines(keepends=True):
        if any(marker in line for marker in markers):
            removed += 1
        else:
            kept.append(line)

    if removed:
        rc_file.write_text("".join(kept), **RC_ENCODING)
        logger.info(f"Removed {removed} line(s) from {rc_file}")
    return removed
