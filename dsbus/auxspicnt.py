"""AUXSPICNT gamecard SPI control register."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Baudrate(IntEnum):
    MHZ4 = 0
    MHZ2 = 1
    MHZ1 = 2
    KHZ512 = 3


class SlotMode(IntEnum):
    PARALLEL_ROM = 0
    SERIAL_SPI = 1


@dataclass
class AuxSpiControl:
    """Fields of the gamecard SPI control register."""

    baudrate: Baudrate = Baudrate.MHZ4
    hold_chipselect: bool = False
    spi_busy: bool = False
    nds_slot_mode: SlotMode = SlotMode.PARALLEL_ROM
    transfer_ready_irq: bool = False
    nds_slot_enable: bool = False

    def write(self, value: int, has_access: bool, mask: int | None = None) -> None:
        """Store ``value``; bits kept by ``mask`` come from the current contents."""
        if not has_access:
            return
        merged = self.read(has_access) & mask if mask is not None else 0
        merged |= value & 0xFFFF

        self.baudrate = Baudrate(merged & 0x3)
        self.hold_chipselect = (merged >> 6) & 1 == 1
        self.nds_slot_mode = SlotMode((merged >> 13) & 1)
        self.transfer_ready_irq = (merged >> 14) & 1 == 1
        self.nds_slot_enable = (merged >> 15) & 1 == 1

    def read(self, has_access: bool) -> int:
        if not has_access:
            return 0
        return (
            int(self.baudrate)
            | int(self.hold_chipselect) << 6
            | int(self.spi_busy) << 7
            | int(self.nds_slot_mode) << 13
            | int(self.transfer_ready_irq) << 14
            | int(self.nds_slot_enable) << 15
        )