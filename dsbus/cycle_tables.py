"""Per-page memory access cycle counts."""

from __future__ import annotations

LUT_SIZE = 0x100

BOARD_RAM_PAGE = 0x2
PALRAM_PAGE = 0x5
VRAM_PAGE = 0x6
OAM_RAM_PAGE = 0x7

SRAM_LO_PAGE = 0xE
SRAM_HI_PAGE = 0xF

WAITSTATE_0_PAGE = 0x8
WAITSTATE_1_PAGE = 0xA
WAITSTATE_2_PAGE = 0xC


class CycleLookupTables:
    """Non-sequential and sequential cycle costs for 16 and 32 bit accesses."""

    def __init__(self) -> None:
        self.n_cycles_32 = [1] * LUT_SIZE
        self.s_cycles_32 = [1] * LUT_SIZE
        self.n_cycles_16 = [1] * LUT_SIZE
        self.s_cycles_16 = [1] * LUT_SIZE

    def _set(self, page: int, cycles_32: int, cycles_16: int) -> None:
        self.n_cycles_32[page] = cycles_32
        self.s_cycles_32[page] = cycles_32
        self.n_cycles_16[page] = cycles_16
        self.s_cycles_16[page] = cycles_16

    def init(self) -> None:
        """Fill in the fixed costs of board RAM and video memory."""
        self._set(BOARD_RAM_PAGE, 6, 3)
        self._set(OAM_RAM_PAGE, 2, 1)
        self._set(VRAM_PAGE, 2, 1)
        self._set(PALRAM_PAGE, 2, 1)

    def update_tables(
        self,
        sram_wait: int,
        ws0_first: int,
        ws0_second: int,
        ws1_first: int,
        ws1_second: int,
        ws2_first: int,
        ws2_second: int,
    ) -> None:
        """Recompute SRAM and cartridge waitstate costs from waitstate settings."""
        self.n_cycles_32[SRAM_LO_PAGE] = sram_wait
        self.n_cycles_16[SRAM_HI_PAGE] = sram_wait
        self.s_cycles_32[SRAM_LO_PAGE] = sram_wait
        self.s_cycles_16[SRAM_HI_PAGE] = sram_wait

        waitstates = (
            (WAITSTATE_0_PAGE, ws0_first, ws0_second),
            (WAITSTATE_1_PAGE, ws1_first, ws1_second),
            (WAITSTATE_2_PAGE, ws2_first, ws2_second),
        )
        for base, first, second in waitstates:
            for page in (base, base + 1):
                self.n_cycles_16[page] = 1 + first
                self.s_cycles_16[page] = 1 + second
                self.n_cycles_32[page] = self.n_cycles_16[page] + self.s_cycles_16[page]
                self.s_cycles_32[page] = 2 * self.s_cycles_16[page]