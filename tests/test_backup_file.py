import pytest

from dsbus.backup_file import BackupFile


def test_zero_filled_without_source():
    backup = BackupFile(None, None, 8, False)
    assert bytes(backup.buffer) == bytes(8)


def test_bytes_kept_when_matching_capacity():
    backup = BackupFile(None, b"\x01\x02\x03\x04", 4, False)
    assert bytes(backup.buffer) == b"\x01\x02\x03\x04"


def test_bytes_replaced_when_size_differs():
    backup = BackupFile(None, b"\x01\x02", 4, False)
    assert bytes(backup.buffer) == b"\xff" * 4


def test_creates_missing_file_filled_with_ff(tmp_path):
    path = tmp_path / "save.sav"
    backup = BackupFile(path, None, 16, True)
    assert path.read_bytes() == b"\xff" * 16
    assert bytes(backup.buffer) == b"\xff" * 16
    assert backup.is_desktop is True


def test_existing_file_is_loaded(tmp_path):
    path = tmp_path / "save.sav"
    path.write_bytes(b"\x10\x20\x30")
    backup = BackupFile(path, None, 16, False)
    assert bytes(backup.buffer) == b"\x10\x20\x30"


def test_read_write_round_trip():
    backup = BackupFile(None, None, 4, False)
    backup.write(2, 0xAB)
    assert backup.read(2) == 0xAB
    assert backup.read(0) == 0


def test_write_out_of_range_raises():
    backup = BackupFile(None, None, 4, False)
    with pytest.raises(IndexError):
        backup.write(4, 1)


def test_flush_writes_buffer(tmp_path):
    path = tmp_path / "save.sav"
    backup = BackupFile(path, None, 4, False)
    backup.write(0, 0x42)
    backup.flush()
    assert path.read_bytes() == b"\x42\xff\xff\xff"


def test_reset_flushes_and_copies(tmp_path):
    path = tmp_path / "fw.bin"
    backup = BackupFile(path, None, 4, False)
    backup.write(1, 0x07)
    backup.has_written = True
    fresh = backup.reset()
    assert path.read_bytes() == b"\xff\x07\xff\xff"
    assert bytes(fresh.buffer) == bytes(backup.buffer)
    assert fresh.buffer is not backup.buffer
    assert fresh.has_written is False
    assert fresh.path == path


def test_reset_without_file_copies_buffer():
    backup = BackupFile(None, b"\x05\x06", 2, False)
    fresh = backup.reset()
    fresh.write(0, 0)
    assert backup.read(0) == 5


def test_reset_with_vanished_file_raises(tmp_path):
    path = tmp_path / "fw.bin"
    backup = BackupFile(path, None, 4, False)
    path.unlink()
    with pytest.raises(FileNotFoundError):
        backup.reset()