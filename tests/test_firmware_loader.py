from pathlib import Path

from dsbus.firmware_loader import load_firmware


def test_neither_path_nor_data_gives_none():
    assert load_firmware(None, None) is None


def test_missing_path_gives_none(tmp_path: Path):
    missing = tmp_path / "firmware.bin"
    assert load_firmware(missing, None) is None
    assert not missing.exists()


def test_missing_path_ignores_data(tmp_path: Path):
    assert load_firmware(tmp_path / "nothing.bin", b"\x01\x02") is None


def test_bytes_are_loaded_whole():
    image = bytes(range(16)) * 4
    backup = load_firmware(None, image)
    assert backup is not None
    assert bytes(backup.buffer) == image
    assert len(backup.buffer) == len(image)
    assert backup.path is None
    assert backup.is_desktop is False


def test_bytes_buffer_is_a_copy():
    image = bytearray(b"\x10\x20\x30\x40")
    backup = load_firmware(None, image)
    image[0] = 0
    assert backup.read(0) == 0x10


def test_file_contents_are_loaded(tmp_path: Path):
    image = bytes([0xAA, 0x55]) * 32
    path = tmp_path / "firmware.bin"
    path.write_bytes(image)
    backup = load_firmware(path, None)
    assert backup is not None
    assert bytes(backup.buffer) == image
    assert backup.path == path
    assert backup.is_desktop is False


def test_path_wins_over_data(tmp_path: Path):
    image = b"\x01\x02\x03\x04"
    path = tmp_path / "firmware.bin"
    path.write_bytes(image)
    backup = load_firmware(str(path), b"\x09\x09\x09\x09")
    assert bytes(backup.buffer) == image


def test_loaded_file_round_trips_through_flush(tmp_path: Path):
    path = tmp_path / "firmware.bin"
    path.write_bytes(bytes(8))
    backup = load_firmware(path, None)
    backup.write(3, 0x7F)
    backup.flush()
    assert path.read_bytes()[3] == 0x7F
    assert len(path.read_bytes()) == 8


def test_empty_bytes_give_empty_buffer():
    backup = load_firmware(None, b"")
    assert backup is not None
    assert len(backup.buffer) == 0


def test_not_written_after_load():
    backup = load_firmware(None, b"\x00\x01")
    assert backup.has_written is False
    assert backup.last_write == 0