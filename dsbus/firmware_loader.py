"""Locate and load the firmware image that backs the SPI flash chip."""

from __future__ import annotations

import os

from .backup_file import BackupFile


def load_firmware(
    path: str | os.PathLike[str] | None = None,
    data: bytes | bytearray | None = None,
) -> BackupFile | None:
    """Load firmware from a file or from raw bytes.

    A path wins over bytes. A path that cannot be inspected, or neither
    argument, yields None so that a synthesised firmware can be used instead.
    """
    if path is not None:
        try:
            size = os.stat(path).st_size
        except OSError:
            return None
        return BackupFile(path, data, size, False)
    if data is not None:
        return BackupFile(None, data, len(data), False)
    return None