"""ARM9 system control coprocessor (CP15) and its TCM region registers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag

CP15_INDEX = 15


class CP15ControlRegister(IntFlag):
    PU_ENABLE = 1
    ALIGNMENT_FAULTCHECK = 1 << 1
    DATA_UNIFIED_CACHE = 1 << 2
    WRITE_BUFFER = 1 << 3
    EXCEPTION_HANDLING = 1 << 4
    ADDRESS_FAULTS_32 = 1 << 5
    ENDIAN_MODE = 1 << 7
    BRANCH_PREDICTION = 1 << 11
    INSTRUCTION_CACHE_ENABLE = 1 << 12
    EXCEPTION_VECTOR = 1 << 13
    CACHE_REPLACEMENT = 1 << 14
    PRE_ARMV5 = 1 << 15
    DTCM_ENABLE = 1 << 16
    DTCM_LOAD_MODE = 1 << 17
    ITCM_ENABLE = 1 << 18
    ITCM_LOAD_MODE = 1 << 19


@dataclass
class TCMControlRegister:
    """Base address and virtual size of a tightly coupled memory region."""

    value: int = 0

    @property
    def base_address(self) -> int:
        return self.value & ~0xFFF & 0xFFFFFFFF

    @property
    def virtual_size_shift(self) -> int:
        return (self.value >> 1) & 0x1F

    @property
    def virtual_size(self) -> int:
        return 0x200 << self.virtual_size_shift

    def ranges(self) -> range:
        """Addresses covered by the region."""
        base = self.base_address
        return range(base, base + self.virtual_size)

    def read(self) -> int:
        return self.value

    def write(self, value: int) -> None:
        self.value = value & 0xFFFFFFFF


@dataclass
class CP15:
    """The CP15 registers the emulated ARM9 uses."""

    control: CP15ControlRegister = CP15ControlRegister(0x52078)
    itcm_control: TCMControlRegister = field(default_factory=lambda: TCMControlRegister(0x0300000A))
    dtcm_control: TCMControlRegister = field(default_factory=lambda: TCMControlRegister(0x00000020))
    arm9_halted: bool = False
    irq_base: int = 0

    def read(self, cn: int, cm: int, cp: int) -> int:
        key = (cn, cm, cp)
        if key == (0, 0, 0):
            return 0x41059461  # main ID
        if key == (0, 0, 1):
            return 0x0F0D2112  # cache type
        if key == (1, 0, 0):
            return int(self.control)
        if key == (9, 1, 0):
            return self.dtcm_control.read()
        if key == (9, 1, 1):
            return self.itcm_control.read()
        return 0

    def write(self, cn: int, cm: int, cp: int, value: int, irq_disable: bool) -> None:
        key = (cn, cm, cp)
        if key == (1, 0, 0):
            self.control = CP15ControlRegister(value & 0xFFFFFFFF)
            if CP15ControlRegister.EXCEPTION_VECTOR in self.control:
                self.irq_base = 0xFFFF_0000
            else:
                self.irq_base = 0
        elif key == (7, 0, 4):
            if value == 0:
                self.arm9_halted = not irq_disable
        elif key == (9, 1, 0):
            self.dtcm_control.write(value)
        elif key == (9, 1, 1):
            self.itcm_control.write(value)