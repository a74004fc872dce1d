"""ROMCTRL gamecard bus control register."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CartridgeControlRegister:
    """Fields of the gamecard ROMCTRL register."""

    key1_gap1_length: int = 0
    key2_encrypt_data: bool = False
    key2_apply_seed: bool = False
    key1_gap2_length: int = 0
    key2_encrypt_command: bool = False
    data_word_status: bool = False
    data_block_size: int = 0
    transfer_clock_rate: bool = False
    key1_gap_clocks: bool = False
    release_reset: bool = False
    data_direction: bool = False
    block_start_status: bool = False

    def read(self, has_access: bool) -> int:
        if not has_access:
            return 0
        return (
            self.key1_gap1_length
            | int(self.key2_encrypt_data) << 13
            | self.key1_gap2_length << 16
            | int(self.key2_encrypt_command) << 22
            | int(self.data_word_status) << 23
            | self.data_block_size << 24
            | int(self.transfer_clock_rate) << 27
            | int(self.key1_gap_clocks) << 28
            | int(self.release_reset) << 29
            | int(self.data_direction) << 30
            | int(self.block_start_status) << 31
        )

    def write(self, value: int, mask: int | None, has_access: bool) -> None:
        """Store ``value``; bits kept by ``mask`` come from the current contents."""
        if not has_access:
            return
        merged = self.read(has_access) & mask if mask is not None else 0
        merged |= value

        def bit(n: int) -> bool:
            return (merged >> n) & 1 == 1

        self.key1_gap1_length = merged & 0x1FFF
        self.key2_encrypt_data = bit(13)
        self.key2_apply_seed = bit(15)
        self.key1_gap2_length = (merged >> 16) & 0x1F
        self.key2_encrypt_command = bit(22)
        self.data_block_size = (merged >> 24) & 0x7
        self.transfer_clock_rate = bit(27)
        self.key1_gap_clocks = bit(28)
        self.release_reset = bit(29)
        self.data_direction = bit(30)
        self.block_start_status = bit(31)