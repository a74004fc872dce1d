"""SPI EEPROM save chip."""

from __future__ import annotations

import time
from enum import Enum, IntEnum, auto

from .backup_file import BackupFile


class EepromError(ValueError):
    """Raised when the chip receives a command it does not know."""


class _WriteProtect(IntEnum):
    NONE = 0
    UPPER_QUARTER = 1
    UPPER_HALF = 2
    ALL = 3


class _Mode(Enum):
    AWAITING_COMMAND = auto()
    READING_REGISTER = auto()
    PROCESSING_DATA = auto()


class _Command(Enum):
    WREN = auto()
    WRDI = auto()
    RDSR = auto()
    WRSR = auto()
    RD = auto()
    WR = auto()
    RDLO = auto()
    RDHI = auto()
    WRLO = auto()
    WRHI = auto()
    NONE = auto()


_READS = (_Command.RD, _Command.RDHI, _Command.RDLO)
_WRITES = (_Command.WR, _Command.WRLO, _Command.WRHI)


def _decode_command(byte: int, width: int) -> _Command:
    small = width < 2
    table = {
        0x6: _Command.WREN,
        0x4: _Command.WRDI,
        0x5: _Command.RDSR,
        0x1: _Command.WRSR,
        0x3: _Command.RDLO if small else _Command.RD,
        0xB: _Command.RDHI,
        0x2: _Command.WRLO if small else _Command.WR,
        0xA: _Command.WRHI,
    }
    try:
        return table[byte]
    except KeyError:
        raise EepromError(f"unimplemented command received: {byte:x}") from None


class Eeprom:
    """EEPROM with 1, 2 or 3 address bytes, driven one SPI byte at a time."""

    def __init__(self, backup_file: BackupFile, address_width: int) -> None:
        self.backup_file = backup_file
        self.address_width = address_width
        self._mode = _Mode.AWAITING_COMMAND
        self._command = _Command.NONE
        self.current_address = 0
        self.current_byte = 0
        self.write_enabled = False
        self.write_in_progress = False
        self._address_bytes_left = 0
        self.write_protect = _WriteProtect.NONE

    def read(self) -> int:
        return self.current_byte

    def read_data(self) -> None:
        self.current_byte = self.backup_file.read(self.current_address)
        self.current_address += 1

    def write_data(self, value: int) -> None:
        self.backup_file.write(self.current_address, value)
        self.current_address += 1

    def _begin_address(self, start: int) -> None:
        self._address_bytes_left = self.address_width
        self.current_address = start
        self._mode = _Mode.PROCESSING_DATA

    def _start_command(self, value: int) -> None:
        self._command = _decode_command(value, self.address_width)
        command = self._command
        if command is _Command.WREN:
            self.write_enabled = True
        elif command is _Command.WRDI:
            self.write_enabled = False
        elif command in (_Command.RD, _Command.RDLO):
            self._begin_address(0)
        elif command is _Command.RDHI:
            self._begin_address(1)
        elif command is _Command.WRHI:
            if self.write_enabled:
                # the high page lives at 0x100-0x1ff; the 1 is shifted up with the address byte
                self._begin_address(1)
        elif command in (_Command.WRLO, _Command.WR):
            if self.write_enabled:
                self._begin_address(0)
        else:
            self._mode = _Mode.READING_REGISTER

    def _register_access(self, value: int) -> None:
        if self._command is _Command.RDSR:
            status = (
                int(self.write_in_progress)
                | (int(self.write_enabled) << 1)
                | (int(self.write_protect) << 2)
            )
            if self.address_width == 1:
                status |= 0xF << 4
            self.current_byte = status
        elif self._command is _Command.WRSR:
            self.write_protect = _WriteProtect((value >> 2) & 0x3)
        else:
            raise EepromError("register access without a register command")
        self._mode = _Mode.AWAITING_COMMAND

    def write(self, value: int, hold: bool) -> None:
        """Feed one byte from the SPI bus; ``hold`` keeps the chip selected."""
        value &= 0xFF
        if self._mode is _Mode.AWAITING_COMMAND:
            if value == 0:
                return
            self._start_command(value)
        elif self._mode is _Mode.READING_REGISTER:
            self._register_access(value)
        elif self._address_bytes_left > 0:
            self.current_address = (self.current_address << 8) | value
            self._address_bytes_left -= 1
        elif self._command in _READS:
            self.read_data()
        elif self._command in _WRITES:
            self.write_data(value)
        else:
            raise EepromError("data phase reached without a data command")

        if not hold:
            if self._command in _WRITES:
                self.backup_file.has_written = True
                if self.backup_file.is_desktop:
                    self.backup_file.last_write = time.time_ns() // 1_000_000
            self._mode = _Mode.AWAITING_COMMAND
            self._command = _Command.NONE