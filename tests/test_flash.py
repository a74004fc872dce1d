import pytest

from dsbus.backup_file import BackupFile
from dsbus.flash import Flash, FlashError


def make_flash(size=0x100, desktop=False):
    data = bytes(i & 0xFF for i in range(size))
    return Flash(BackupFile(None, data, size, desktop))


def send(flash, *values, hold_last=True):
    for value in values[:-1]:
        flash.write(value, True)
    flash.write(values[-1], hold_last)


def test_read_returns_stored_bytes():
    flash = make_flash()
    send(flash, 0x03, 0x00, 0x00, 0x20, 0x00)
    assert flash.read() == 0x20
    flash.write(0x00, False)
    assert flash.read() == 0x21


def test_page_write_needs_write_enable():
    flash = make_flash()
    flash.write(0x06, False)
    send(flash, 0x0A, 0x00, 0x00, 0x10, 0xAA, 0xBB, hold_last=False)
    assert flash.backup_file.read(0x10) == 0xAA
    assert flash.backup_file.read(0x11) == 0xBB
    assert flash.backup_file.has_written is True


def test_page_write_returns_previous_byte():
    flash = make_flash()
    flash.write(0x06, False)
    send(flash, 0x0A, 0x00, 0x00, 0x05, 0x99)
    assert flash.read() == 0x05
    assert flash.backup_file.read(0x05) == 0x99


def test_page_write_ignored_without_enable():
    flash = make_flash()
    before = bytes(flash.backup_file.buffer)
    flash.write(0x0A, False)
    assert bytes(flash.backup_file.buffer) == before


def test_status_register_reports_write_enable():
    flash = make_flash()
    flash.write(0x06, False)
    send(flash, 0x05, 0x00)
    assert flash.read() == 0b10
    flash.write(0x00, False)
    flash.write(0x04, False)
    send(flash, 0x05, 0x00)
    assert flash.read() == 0


def test_desktop_write_stamps_time():
    flash = make_flash(desktop=True)
    flash.write(0x06, False)
    send(flash, 0x0A, 0x00, 0x00, 0x00, 0x01, hold_last=False)
    assert flash.backup_file.last_write > 0


def test_deselect_returns_to_command_mode():
    flash = make_flash()
    send(flash, 0x03, 0x00)
    flash.deselect()
    flash.write(0x06, False)
    send(flash, 0x05, 0x00)
    assert flash.read() == 0b10


def test_invalid_command_raises():
    flash = make_flash()
    with pytest.raises(FlashError):
        flash.write(0x77, False)


def test_unsupported_command_raises():
    flash = make_flash()
    with pytest.raises(FlashError):
        flash.write(0xD8, False)