"""Byte buffer backing a save or firmware chip, optionally mirrored to a file."""

from __future__ import annotations

import os
from pathlib import Path


class BackupFile:
    """In-memory contents of a backup chip, with an optional file on disk."""

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        data: bytes | bytearray | None = None,
        capacity: int = 0,
        is_desktop: bool = False,
    ) -> None:
        self.path: Path | None = Path(path) if path is not None else None
        self.has_written = False
        self.last_write = 0
        self.is_desktop = is_desktop

        if self.path is not None:
            if not self.path.is_file():
                self.path.write_bytes(b"\xff" * capacity)
            self.buffer = bytearray(self.path.read_bytes())
        elif data is not None:
            if len(data) == capacity:
                self.buffer = bytearray(data)
            else:
                self.buffer = bytearray(b"\xff" * capacity)
        else:
            self.buffer = bytearray(capacity)

    def reset(self) -> BackupFile:
        """Flush to disk and return a fresh copy holding the same contents."""
        if self.path is not None:
            self.flush()
        fresh = BackupFile.__new__(BackupFile)
        fresh.path = self.path
        fresh.buffer = bytearray(self.buffer)
        fresh.has_written = False
        fresh.last_write = 0
        fresh.is_desktop = self.is_desktop
        return fresh

    def read(self, address: int) -> int:
        return self.buffer[address]

    def write(self, address: int, value: int) -> None:
        self.buffer[address] = value & 0xFF

    def flush(self) -> None:
        """Write the buffer over the start of the backing file, if there is one."""
        if self.path is None:
            return
        with open(self.path, "r+b") as handle:
            handle.seek(0)
            handle.write(self.buffer)