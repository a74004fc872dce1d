"""DMA control register decoding, single DMA channels and the four-channel block."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, IntFlag, auto

CHECK_GEOMETRY_FIFO = "check_geometry_fifo"

_MASK32 = 0xFFFFFFFF

Schedule = Callable[[str, int], None]


class DmaTiming(Enum):
    IMMEDIATELY = auto()
    VBLANK = auto()
    HBLANK = auto()
    FIFO = auto()
    START_OF_DISPLAY = auto()
    DS_CARTRIDGE_SLOT = auto()
    GBA_CARTRIDGE_SLOT = auto()
    GEOMETRY_COMMAND_FIFO = auto()
    WIRELESS = auto()
    MAIN_MEMORY_DISPLAY = auto()


class DmaControlRegister(IntFlag):
    DMA_REPEAT = 1 << 25
    DMA_TRANSFER_TYPE = 1 << 26
    IRQ_ENABLE = 1 << 30
    DMA_ENABLE = 1 << 31


_ARM9_TIMINGS = (
    DmaTiming.IMMEDIATELY,
    DmaTiming.VBLANK,
    DmaTiming.HBLANK,
    DmaTiming.START_OF_DISPLAY,
    DmaTiming.MAIN_MEMORY_DISPLAY,
    DmaTiming.DS_CARTRIDGE_SLOT,
    DmaTiming.GBA_CARTRIDGE_SLOT,
    DmaTiming.GEOMETRY_COMMAND_FIFO,
)

_ARM7_TIMINGS = (
    DmaTiming.IMMEDIATELY,
    DmaTiming.VBLANK,
    DmaTiming.DS_CARTRIDGE_SLOT,
    DmaTiming.WIRELESS,  # or the GBA cartridge, depending on the channel
)


def dest_addr_control(control: int) -> int:
    return (control >> 21) & 0x3


def source_addr_control(control: int) -> int:
    return (control >> 23) & 0x3


def word_count(control: int) -> int:
    return control & 0x1FFFFF


def start_timing(control: int, is_arm9: bool) -> DmaTiming:
    """Start timing selected by the control value for the given CPU."""
    if is_arm9:
        return _ARM9_TIMINGS[(control >> 27) & 0x7]
    return _ARM7_TIMINGS[(control >> 28) & 0x3]


def _enabled(control: int) -> bool:
    return bool(control & DmaControlRegister.DMA_ENABLE)


@dataclass
class DmaParams:
    """Everything needed to carry out one DMA transfer."""

    fifo_mode: bool
    count: int
    word_size: int
    destination_adjust: int
    source_adjust: int
    should_trigger_irq: bool
    source_address: int
    destination_address: int


@dataclass
class DmaChannel:
    """One DMA channel with its programmed and internal addresses."""

    id: int
    is_arm9: bool
    source_address: int = 0
    destination_address: int = 0
    internal_source_address: int = 0
    internal_destination_address: int = 0
    internal_count: int = 0
    dma_control: int = 0
    pending: bool = False
    running: bool = False
    fifo_mode: bool = False

    def transfer_parameters(self) -> DmaParams:
        """Describe the transfer the channel is currently set up for."""
        control = self.dma_control
        word_size = 4 if control & DmaControlRegister.DMA_TRANSFER_TYPE else 2

        if self.internal_count == 0:
            count = 0x1_0000 if self.id == 3 else 0x4000
        else:
            count = self.internal_count

        dest_mode = dest_addr_control(control)
        destination_adjust = {0: word_size, 3: word_size, 1: -word_size, 2: 0}[dest_mode]

        source_mode = source_addr_control(control)
        if source_mode == 3:
            raise ValueError("illegal value specified for source address control")
        source_adjust = {0: word_size, 1: -word_size, 2: 0}[source_mode]

        return DmaParams(
            fifo_mode=self.fifo_mode,
            count=count,
            word_size=word_size,
            destination_adjust=destination_adjust,
            source_adjust=source_adjust,
            should_trigger_irq=bool(control & DmaControlRegister.IRQ_ENABLE),
            source_address=self.internal_source_address,
            destination_address=self.internal_destination_address,
        )

    def write_source(self, address: int, mask: int) -> None:
        self.source_address = ((self.source_address & mask) | address) & _MASK32

    def write_control(self, value: int, mask: int | None, schedule: Schedule) -> None:
        """Store the control value; bits kept by ``mask`` come from the current value."""
        merged = self.dma_control & mask if mask is not None else 0
        merged = (merged | value) & _MASK32

        if _enabled(merged) and not _enabled(self.dma_control):
            self.internal_destination_address = self.destination_address
            self.internal_source_address = self.source_address
            self.internal_count = word_count(merged)
            self.running = True

            timing = start_timing(merged, self.is_arm9)
            if timing is DmaTiming.IMMEDIATELY:
                self.pending = True
            elif timing is DmaTiming.GEOMETRY_COMMAND_FIFO:
                schedule(CHECK_GEOMETRY_FIFO, 1)
            else:
                self.pending = False

        if not _enabled(merged):
            self.running = False

        self.dma_control = merged


class AddressType(Enum):
    LOW = auto()
    HIGH = auto()


@dataclass
class DmaChannels:
    """The four DMA channels belonging to one CPU."""

    is_arm9: bool
    channels: list[DmaChannel] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.channels:
            self.channels = [DmaChannel(i, self.is_arm9) for i in range(4)]

    def _trigger(self, predicate: Callable[[DmaChannel], bool]) -> None:
        for channel in self.channels:
            if _enabled(channel.dma_control) and predicate(channel):
                channel.pending = True

    def _timed(self, channel: DmaChannel, timing: DmaTiming) -> bool:
        return start_timing(channel.dma_control, self.is_arm9) is timing

    def notify_gpu_event(self, timing: DmaTiming) -> None:
        self._trigger(lambda ch: self._timed(ch, timing))

    def notify_cartridge_event(self) -> None:
        self._trigger(lambda ch: self._timed(ch, DmaTiming.DS_CARTRIDGE_SLOT))

    def notify_apu_event(self, address: int) -> None:
        self._trigger(
            lambda ch: ch.running
            and self._timed(ch, DmaTiming.FIFO)
            and ch.destination_address == address
        )

    def notify_geometry_fifo_event(self) -> None:
        self._trigger(lambda ch: self._timed(ch, DmaTiming.GEOMETRY_COMMAND_FIFO))

    def write(
        self, channel: int, index: int, value: int, mask: int | None, schedule: Schedule
    ) -> None:
        """Write a channel register: 0 source, 4 destination, 8 control."""
        target = self.channels[channel]
        if index == 0x0:
            kept = target.source_address & mask if mask is not None else 0
            target.source_address = (kept | value) & _MASK32
        elif index == 0x4:
            kept = target.destination_address & mask if mask is not None else 0
            target.destination_address = (kept | value) & _MASK32
        elif index == 0x8:
            target.write_control(value, mask, schedule)
        else:
            raise ValueError(f"invalid index given for dma write: {index:#x}")

    def read(self, channel: int, index: int) -> int:
        """Read a channel register: 0 source, 4 destination, 8 control."""
        target = self.channels[channel]
        if index == 0x0:
            return target.source_address
        if index == 0x4:
            return target.destination_address
        if index == 0x8:
            return target.dma_control
        raise ValueError(f"invalid index given for dma read: {index:#x}")

    def transfer_parameters(self, index: int) -> DmaParams | None:
        """Take the pending transfer of a channel, or None if it has none."""
        channel = self.channels[index]
        if not channel.pending:
            return None
        params = channel.transfer_parameters()
        channel.pending = False
        return params

    def has_pending_transfers(self) -> bool:
        return any(channel.pending for channel in self.channels)

    def set_source_address(self, channel_id: int, value: int, address_type: AddressType) -> None:
        channel = self.channels[channel_id]
        channel.source_address = _merge_half(channel.source_address, value, address_type)

    def set_destination_address(
        self, channel_id: int, value: int, address_type: AddressType
    ) -> None:
        channel = self.channels[channel_id]
        channel.destination_address = _merge_half(
            channel.destination_address, value, address_type
        )


def _merge_half(current: int, value: int, address_type: AddressType) -> int:
    value &= 0xFFFF
    if address_type is AddressType.LOW:
        return (current & 0xFFFF0000) | value
    return (current & 0xFFFF) | ((value & 0xFFF) << 16)