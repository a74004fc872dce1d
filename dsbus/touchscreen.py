"""Touchscreen controller (TSC) on the ARM7 SPI bus, including the microphone."""

from __future__ import annotations

from collections.abc import Sequence

SAMPLE_SIZE = 735
CYCLES_PER_FRAME = 560190
SCREEN_WIDTH = 256
SCREEN_HEIGHT = 192


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class Touchscreen:
    """Touch position and microphone samples served over SPI."""

    def __init__(self) -> None:
        self.x = 0
        self.y = 0
        self._data = 0
        self._return_byte = 0
        self.mic_buffer = [0] * SAMPLE_SIZE
        self._read_pos = 0

    def write(self, value: int, frame_cycles: int) -> None:
        """Clock one byte in; a set start bit selects the channel to convert."""
        self._return_byte = (self._data >> 8) & 0xFF
        self._data = (self._data << 8) & 0xFFFF

        if (value >> 7) & 1:
            channel = (value >> 4) & 0x7
            if channel == 1:
                self._data = (self.y << 3) & 0xFFFF
            elif channel == 5:
                self._data = (self.x << 3) & 0xFFFF
            elif channel == 6:
                index = (frame_cycles * SAMPLE_SIZE) // CYCLES_PER_FRAME
                sample = self.mic_buffer[min(index, len(self.mic_buffer) - 1)]
                converted = ((sample ^ -32768) >> 4) & 0xFFFF
                self._data = (converted << 3) & 0xFFFF
            else:
                self._data = 0xFFF

    def update_mic_buffer(self, samples: Sequence[int]) -> None:
        """Take the next frame's worth of microphone samples, wrapping around."""
        if self._read_pos + SAMPLE_SIZE >= len(samples):
            length = len(samples) - self._read_pos
            head = list(samples[self._read_pos:length])
            diff = SAMPLE_SIZE - length
            if diff > len(samples):
                raise ValueError("not enough microphone samples to fill a frame")
            chunk = head + list(samples[:diff])
            self.mic_buffer[:len(chunk)] = chunk
            self._read_pos = diff
        else:
            self.mic_buffer = list(samples[self._read_pos:self._read_pos + SAMPLE_SIZE])
            self._read_pos += SAMPLE_SIZE

    def deselect(self) -> None:
        self._data = 0

    def read(self) -> int:
        return self._return_byte

    def touch_screen(self, x: int, y: int) -> None:
        self.x = (x << 4) & 0xFFFF
        self.y = (y << 4) & 0xFFFF

    def touch_screen_controller(self, x: int, y: int) -> None:
        """Position the pointer from analogue stick offsets around the screen centre."""
        middle_x = SCREEN_WIDTH // 2
        middle_y = SCREEN_HEIGHT // 2
        self.x = ((middle_x + _trunc_div(x, 1000)) << 4) & 0xFFFF
        self.y = ((middle_y + _trunc_div(y, 1000)) << 4) & 0xFFFF

    def release_screen(self) -> None:
        self.x = 0
        self.y = 0xFFF