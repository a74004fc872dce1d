"""SPI flash memory chip used for saves and firmware."""

from __future__ import annotations

import time
from enum import Enum, auto

from .backup_file import BackupFile


class FlashError(ValueError):
    """Raised when the chip receives a command it cannot handle."""


class _Mode(Enum):
    AWAITING_COMMAND = auto()
    PROCESSING_DATA = auto()
    READING_REGISTER = auto()


class _Command(Enum):
    WREN = auto()
    WRDI = auto()
    RDSR = auto()
    READ = auto()
    FAST = auto()
    PW = auto()
    PP = auto()
    PE = auto()
    SE = auto()
    DP = auto()
    RDP = auto()
    NONE = auto()
    IR = auto()


_COMMANDS = {
    0x00: _Command.IR,
    0x08: _Command.IR,
    0x06: _Command.WREN,
    0x04: _Command.WRDI,
    0x05: _Command.RDSR,
    0x03: _Command.READ,
    0x0B: _Command.FAST,
    0x0A: _Command.PW,
    0x02: _Command.PP,
    0xDB: _Command.PE,
    0xD8: _Command.SE,
    0xB9: _Command.DP,
    0xAB: _Command.RDP,
}


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class Flash:
    """Byte-serial flash chip driven one SPI byte at a time."""

    def __init__(self, backup_file: BackupFile) -> None:
        self.backup_file = backup_file
        self.write_enable = False
        self.write_in_progress = False
        self._mode = _Mode.AWAITING_COMMAND
        self._address_bytes_left = 0
        self._command = _Command.NONE
        self.current_address = 0
        self.current_byte = 0

    def read_byte(self) -> None:
        self.current_byte = self.backup_file.read(self.current_address)
        self.current_address += 1

    def write_byte(self, value: int) -> None:
        self.current_byte = self.backup_file.read(self.current_address)
        self.backup_file.write(self.current_address, value)
        self.current_address += 1

    def _start_command(self, data: int) -> None:
        try:
            self._command = _COMMANDS[data]
        except KeyError:
            raise FlashError(f"invalid instruction byte received: {data:x}") from None

        command = self._command
        if command is _Command.IR:
            return
        if command is _Command.WREN:
            self.write_enable = True
        elif command is _Command.WRDI:
            self.write_enable = False
        elif command is _Command.READ:
            self._begin_address()
        elif command is _Command.RDSR:
            self._mode = _Mode.READING_REGISTER
        elif command is _Command.PW:
            if self.write_enable:
                self._begin_address()
        else:
            raise FlashError(f"unsupported flash command: {data:x}")

    def _begin_address(self) -> None:
        self._address_bytes_left = 3
        self.current_address = 0
        self._mode = _Mode.PROCESSING_DATA

    def write(self, data: int, hold: bool) -> None:
        """Feed one byte from the SPI bus; ``hold`` keeps the chip selected."""
        data &= 0xFF
        if self._mode is _Mode.AWAITING_COMMAND:
            self._start_command(data)
        elif self._mode is _Mode.PROCESSING_DATA:
            if self._address_bytes_left > 0:
                self.current_address = ((self.current_address << 8) | data) & 0xFFFFFFFF
                self._address_bytes_left -= 1
            elif self._command in (_Command.READ, _Command.FAST):
                self.read_byte()
            elif self._command is _Command.PW:
                self.write_byte(data)
            else:
                raise FlashError("data phase reached without a data command")
        else:
            self.current_byte = int(self.write_in_progress) | (int(self.write_enable) << 1)

        if not hold:
            if self._command is _Command.PW:
                self.backup_file.has_written = True
                if self.backup_file.is_desktop:
                    self.backup_file.last_write = _now_millis()
            self._mode = _Mode.AWAITING_COMMAND

    def deselect(self) -> None:
        self._mode = _Mode.AWAITING_COMMAND

    def read(self) -> int:
        return self.current_byte