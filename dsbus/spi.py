"""ARM7 SPI bus devices: the firmware flash chip."""

from __future__ import annotations

from .backup_file import BackupFile
from .firmware_data import FIRMWARE_CAPACITY, FirmwareData
from .flash import Flash


def build_hle_firmware() -> Flash:
    """Create a flash chip holding a synthesised firmware image."""
    firmware = Flash(BackupFile(None, None, FIRMWARE_CAPACITY, False))
    buffer = firmware.backup_file.buffer
    buffer[0:0x1D] = bytes(0x1D)
    buffer[0x2FF] = 0x80
    FirmwareData().fill_buffer(buffer)
    return firmware


class SPI:
    """Devices attached to the ARM7 SPI bus."""

    def __init__(self, firmware_file: BackupFile | None = None) -> None:
        if firmware_file is not None:
            self.firmware = Flash(firmware_file)
        else:
            self.firmware = build_hle_firmware()