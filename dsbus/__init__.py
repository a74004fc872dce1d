"""Peripherals behind the memory bus of a dual-screen handheld emulator."""

__version__ = "0.1.0"

__all__ = [
    "arith",
    "auxspicnt",
    "backup_file",
    "cp15",
    "cycle_tables",
    "dma",
    "eeprom",
    "firmware_data",
    "firmware_loader",
    "flash",
    "romctrl",
    "spi",
    "touchscreen",
]