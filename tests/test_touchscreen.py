import pytest

from dsbus.touchscreen import CYCLES_PER_FRAME, SAMPLE_SIZE, Touchscreen


def _convert(ts, command, frame_cycles=0):
    ts.write(command, frame_cycles)
    ts.write(0, frame_cycles)
    high = ts.read()
    ts.write(0, frame_cycles)
    low = ts.read()
    return (high << 8) | low


def test_release_screen():
    ts = Touchscreen()
    ts.touch_screen(10, 20)
    ts.release_screen()
    assert ts.x == 0
    assert ts.y == 0xFFF


def test_x_and_y_channels_report_position():
    ts = Touchscreen()
    ts.touch_screen(100, 50)
    assert _convert(ts, 0xD0) == (ts.x << 3) & 0xFFFF
    assert _convert(ts, 0x90) == (ts.y << 3) & 0xFFFF


def test_unknown_channel_returns_full_scale():
    ts = Touchscreen()
    assert _convert(ts, 0x80) == 0xFFF


def test_deselect_clears_data():
    ts = Touchscreen()
    ts.write(0x80, 0)
    ts.deselect()
    ts.write(0, 0)
    assert ts.read() == 0


def test_controller_centres_and_truncates():
    ts = Touchscreen()
    ts.touch_screen_controller(0, 0)
    reference = Touchscreen()
    reference.touch_screen(128, 96)
    assert (ts.x, ts.y) == (reference.x, reference.y)

    ts.touch_screen_controller(1999, -1999)
    reference.touch_screen(129, 95)
    assert (ts.x, ts.y) == (reference.x, reference.y)


def test_mic_buffer_advances_and_wraps():
    samples = list(range(2000))
    ts = Touchscreen()
    ts.update_mic_buffer(samples)
    assert ts.mic_buffer == samples[:SAMPLE_SIZE]
    ts.update_mic_buffer(samples)
    assert ts.mic_buffer == samples[SAMPLE_SIZE:2 * SAMPLE_SIZE]
    ts.update_mic_buffer(samples)
    remaining = 2000 - 2 * SAMPLE_SIZE
    wrapped = SAMPLE_SIZE - remaining
    assert ts.mic_buffer[:wrapped] == samples[:wrapped]


def test_mic_channel_minimum_sample_reads_zero():
    ts = Touchscreen()
    ts.update_mic_buffer([-32768] * SAMPLE_SIZE * 2)
    assert _convert(ts, 0xE0) == 0


def test_mic_channel_past_frame_uses_last_sample():
    ts = Touchscreen()
    samples = [32767] * (SAMPLE_SIZE - 1) + [-32768, 0]
    ts.update_mic_buffer(samples)
    assert ts.mic_buffer[-1] == -32768
    assert _convert(ts, 0xE0, CYCLES_PER_FRAME * 2) == 0


def test_too_few_samples_rejected():
    ts = Touchscreen()
    with pytest.raises(ValueError):
        ts.update_mic_buffer([0] * 10)