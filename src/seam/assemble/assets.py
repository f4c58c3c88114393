"""Asset handling — copy non-HTML input files into the output tree."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

from seam._errors import AssemblyError

if TYPE_CHECKING:
    from pathlib import Path


def copy_asset(source: Path, dest: Path) -> int:
    """Copy *source* to *dest* byte for byte, creating parent directories.

    The source modification time is preserved so that the copy is fresh
    on the next incremental pass.

    Returns:
        Size in bytes of the copied file.

    Raises:
        AssemblyError: If the source is unreadable or the destination
            cannot be created.

    """
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, dest)
        return dest.stat().st_size
    except OSError as exc:
        msg = f"Failed to copy asset {source} -> {dest}: {exc}"
        raise AssemblyError(msg) from exc
