"""Contents of the built-in firmware image: wifi header and user settings."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

FIRMWARE_CAPACITY = 0x40000
FIRMWARE_MASK = FIRMWARE_CAPACITY - 1

USER_SETTINGS_BASE = 0x3FE00
_USER_SETTINGS_SIZE = 0x100
_HEADER_SIZE = 0x200

MAC_ADDRESS = bytes([0x00, 0x09, 0xBF, 0x11, 0x22, 0x33])

INITIAL_BB_VALUES = bytes([
    0x03, 0x17, 0x40, 0x00, 0x1B, 0x6C, 0x48, 0x80, 0x38, 0x00, 0x35, 0x07, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0xB0, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0xC7, 0xBB, 0x01, 0x24, 0x7F,
    0x5A, 0x01, 0x3F, 0x01, 0x3F, 0x36, 0x1D, 0x00, 0x78, 0x35, 0x55, 0x12, 0x34, 0x1C, 0x00, 0x01,
    0x0E, 0x38, 0x03, 0x70, 0xC5, 0x2A, 0x0A, 0x08, 0x04, 0x01, 0x00, 0x00, 0x00, 0xFF, 0xFF, 0xFE,
    0xFE, 0xFE, 0xFE, 0xFC, 0xFC, 0xFA, 0xFA, 0xFA, 0xFA, 0xFA, 0xF8, 0xF8, 0xF6, 0x00, 0x12, 0x14,
    0x12, 0x41, 0x23, 0x03, 0x04, 0x70, 0x35, 0x0E, 0x2C, 0x2C, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x0E, 0x00, 0x00, 0x12, 0x28, 0x1C,
])

INITIAL_RF_VALUES = bytes([
    0x31, 0x4C, 0x4F, 0x21, 0x00, 0x10, 0xB0, 0x08, 0xFA, 0x15, 0x26, 0xE6, 0xC1, 0x01, 0x0E, 0x50,
    0x05, 0x00, 0x6D, 0x12, 0x00, 0x00, 0x01, 0xFF, 0x0E, 0x00, 0x02, 0x00, 0x00, 0x00, 0x00, 0x06,
    0x06, 0x00, 0x00, 0x00, 0x18, 0x00, 0x02, 0x00, 0x00,
])

BB_DATA1 = bytes([0x0C, 0x0C, 0x0C, 0x0C, 0x0C, 0x0C, 0x0E, 0x0E, 0x0E, 0x0E, 0x0E, 0x0E, 0x0E, 0x16])
BB_DATA2 = bytes([0x1C, 0x1C, 0x1C, 0x1D, 0x1D, 0x1D, 0x1E, 0x1E, 0x1E, 0x1E, 0x1F, 0x1E, 0x1F, 0x18])
RF_DATA1 = bytes([0x4B, 0x4B, 0x4B, 0x4B, 0x4C, 0x4C, 0x4C, 0x4C, 0x4C, 0x4C, 0x4C, 0x4D, 0x4D, 0x4D])
RF_DATA2 = bytes([0x6C, 0x71, 0x76, 0x5B, 0x40, 0x45, 0x4A, 0x2F, 0x34, 0x39, 0x3E, 0x03, 0x08, 0x14])

DEFAULT_UNUSED3 = bytes([0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0x00])

INITIAL_VALUES = (
    0x0002, 0x0017, 0x0026, 0x1818, 0x0048, 0x4840, 0x0058, 0x0042,
    0x0146, 0x8064, 0xE6E6, 0x2443, 0x000E, 0x0001, 0x0001, 0x0402,
)

_CRC_VARS = (0xC0C1, 0xC181, 0xC301, 0xC601, 0xCC01, 0xD801, 0xF001, 0xA001)


class RFChipType(IntEnum):
    TYPE2 = 0x2
    TYPE3 = 0x3


class WifiVersion(IntEnum):
    W006 = 6


class ConsoleType(IntEnum):
    DS = 0xFF
    DS_LITE = 0x20


def crc16(data: bytes | bytearray, length: int, start: int) -> int:
    """Firmware CRC16 over the first ``length`` bytes of ``data``."""
    crc = start & 0xFFFFFFFF
    for byte in data[:length]:
        crc ^= byte
        for j, var in enumerate(_CRC_VARS):
            carry = crc & 1
            crc >>= 1
            if carry:
                crc ^= var << (7 - j)
    return crc & 0xFFFF


def _require(buffer: bytearray, size: int) -> None:
    if len(buffer) < size:
        raise ValueError(f"firmware buffer too small: need {size:#x} bytes, got {len(buffer):#x}")


def _put16(buffer: bytearray, offset: int, value: int) -> None:
    struct.pack_into("<H", buffer, offset, value & 0xFFFF)


def _put_bytes(buffer: bytearray, offset: int, data: bytes) -> None:
    buffer[offset:offset + len(data)] = data


@dataclass
class UserSettings:
    """User settings block stored at the end of the firmware."""

    version: int = 5
    nickname: str = "NDS Plus"
    birthday_month: int = 5
    birthday_day: int = 24
    favorite_color: int = 2
    message: str = "Hello!"
    settings: int = 1 | (3 << 4)  # english, max lighting level
    unused2: bytes = b"\xff\xff\xff\xff"
    touch_calibration_adc1: tuple[int, int] = (0, 0)
    touch_calibration_pixel1: tuple[int, int] = (0, 0)
    touch_calibration_adc2: tuple[int, int] = (255 << 4, 191 << 4)
    touch_calibration_pixel2: tuple[int, int] = (255, 191)

    @property
    def name_length(self) -> int:
        return len(self.nickname)

    @property
    def message_length(self) -> int:
        return len(self.message)

    def fill_buffer(self, buffer: bytearray) -> None:
        """Write the settings block and its checksum into a firmware image."""
        base = USER_SETTINGS_BASE
        _require(buffer, base + _USER_SETTINGS_SIZE)

        _put16(buffer, base, self.version)
        buffer[base + 0x2] = self.favorite_color
        buffer[base + 0x3] = self.birthday_month
        buffer[base + 0x4] = self.birthday_day

        _put_bytes(buffer, base + 0x6, self.nickname.encode("utf-16-le"))
        _put16(buffer, base + 0x1A, self.name_length)

        _put_bytes(buffer, base + 0x1C, self.message.encode("utf-16-le"))
        _put16(buffer, base + 0x50, self.message_length)

        struct.pack_into("<2H", buffer, base + 0x58, *self.touch_calibration_adc1)
        _put_bytes(buffer, base + 0x5C, bytes(self.touch_calibration_pixel1))
        struct.pack_into("<2H", buffer, base + 0x5E, *self.touch_calibration_adc2)
        _put_bytes(buffer, base + 0x62, bytes(self.touch_calibration_pixel2))

        _put16(buffer, base + 0x64, self.settings)
        _put_bytes(buffer, base + 0x6C, bytes(self.unused2[:4]))

        crc = crc16(buffer[base:base + _USER_SETTINGS_SIZE], 0x70, 0xFFFF)
        _put16(buffer, base + 0x72, crc)


@dataclass
class FirmwareHeader:
    """Firmware header and wifi calibration data."""

    user_settings_offset: int = 0x7FC0
    console_type: ConsoleType = ConsoleType.DS_LITE
    identifier: bytes = b"NDSP"
    wifi_config_length: int = 0x138
    wifi_version: WifiVersion = WifiVersion.W006
    mac_address: bytes = MAC_ADDRESS
    rf_chip_type: RFChipType = RFChipType.TYPE3
    rf_bits_per_entry: int = 0x94
    rf_entries: int = 0x29
    initial_values: list[int] = field(default_factory=lambda: [0] * 16)
    initial_bb_values: bytes = INITIAL_BB_VALUES
    initial_rf_values: bytes = INITIAL_RF_VALUES
    bb_indices_per_channel: int = 2
    bb_index1: int = 0x1E
    bb_data1: bytes = BB_DATA1
    bb_index2: int = 0x26
    bb_data2: bytes = BB_DATA2
    rf_index1: int = 0x1
    rf_data1: bytes = RF_DATA1
    rf_index2: int = 0x02
    rf_data2: bytes = RF_DATA2
    unused0: bytes = b"\xff" * 46
    wifi_board: int = 0xFF
    wifi_flash: int = 0xFF
    dsi_3ds: int = 0xFF
    unused3: bytes = DEFAULT_UNUSED3

    def fill_buffer(self, buffer: bytearray) -> None:
        """Write the header and wifi settings into a firmware image."""
        _require(buffer, _HEADER_SIZE)

        _put_bytes(buffer, 0x8, bytes(self.identifier[:4]))
        buffer[0x1D] = int(self.console_type)
        _put16(buffer, 0x20, self.user_settings_offset)

        _put16(buffer, 0x2C, self.wifi_config_length)
        buffer[0x2F] = int(self.wifi_version)
        _put_bytes(buffer, 0x30, bytes(self.unused3[:6]))
        _put_bytes(buffer, 0x36, bytes(self.mac_address[:6]))
        buffer[0x3E:0x40] = b"\xff\xff"

        buffer[0x40] = int(self.rf_chip_type)
        buffer[0x41] = self.rf_bits_per_entry
        buffer[0x42] = self.rf_entries
        buffer[0x43] = 0x1

        struct.pack_into("<16H", buffer, 0x44, *(v & 0xFFFF for v in self.initial_values))

        _put_bytes(buffer, 0x64, bytes(self.initial_bb_values[:0x69]))
        _put_bytes(buffer, 0xCE, bytes(self.initial_rf_values[:41]))

        buffer[0xF7] = self.bb_indices_per_channel
        buffer[0xF8] = self.bb_index1
        _put_bytes(buffer, 0xF9, bytes(self.bb_data1[:14]))
        buffer[0x107] = self.bb_index2
        _put_bytes(buffer, 0x108, bytes(self.bb_data2[:14]))
        buffer[0x116] = self.rf_index1
        _put_bytes(buffer, 0x117, bytes(self.rf_data1[:14]))
        buffer[0x125] = self.rf_index2
        _put_bytes(buffer, 0x126, bytes(self.rf_data2[:14]))

        _put_bytes(buffer, 0x134, bytes(self.unused0[:46]))

        buffer[0x1FD] = self.wifi_board
        buffer[0x1FE] = self.wifi_flash
        buffer[0x1FF] = self.dsi_3ds


@dataclass
class FirmwareData:
    """Everything needed to synthesise a bootable firmware image."""

    header: FirmwareHeader = field(
        default_factory=lambda: FirmwareHeader(initial_values=list(INITIAL_VALUES))
    )
    user_settings: UserSettings = field(default_factory=UserSettings)

    def fill_buffer(self, buffer: bytearray) -> None:
        """Write the header and the user settings into a firmware image."""
        self.header.fill_buffer(buffer)
        self.user_settings.fill_buffer(buffer)