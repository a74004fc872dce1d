# dsbus

Building blocks for the memory bus of a dual-screen handheld emulator. The
package models several of the peripherals that sit behind the bus, as plain
Python objects that you drive one register write or one serial byte at a time.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## What is inside

- `dsbus.backup_file.BackupFile` is a byte buffer for save or firmware data.
  Given a path, it loads the file. If the file does not exist, it first creates
  one filled with `0xff`. `flush()` writes the buffer back to the file.
  `reset()` flushes and returns a fresh copy.
- `dsbus.flash.Flash` and `dsbus.eeprom.Eeprom` are serial backup-memory chips.
  Feed them bytes with `write(value, hold)` and collect the reply with `read()`.
  A `hold` of `False` ends the command. Unknown or unsupported command bytes
  raise `FlashError` or `EepromError`.
- `dsbus.romctrl.CartridgeControlRegister` is the gamecard ROMCTRL register.
  `dsbus.auxspicnt.AuxSpiControl` is the AUXSPICNT register, with its `Baudrate`
  and `SlotMode` enums. Both `read` and `write` take a `has_access` flag and an
  optional mask of bits to keep.
- `dsbus.dma` decodes DMA control values (`dest_addr_control`,
  `source_addr_control`, `word_count`, `start_timing`). It also provides
  `DmaChannel` and the four-channel `DmaChannels`. These handle pending
  transfers, event notifications and `DmaParams` describing a transfer.
  Scheduling is done through a callback `schedule(event_name, cycles)`.
- `dsbus.cp15.CP15` is the system control coprocessor. It holds the control
  register (`CP15ControlRegister` flags) and the ITCM and DTCM regions
  (`TCMControlRegister`, whose `ranges()` gives the covered addresses).
- `dsbus.cycle_tables.CycleLookupTables` holds per-page access cycle tables.
  `init()` fills in the fixed costs. `update_tables(...)` applies SRAM and
  waitstate settings.
- `dsbus.firmware_data` builds a default firmware image from `FirmwareHeader`
  and `UserSettings`, combined in `FirmwareData.fill_buffer`. It also provides
  the firmware `crc16`.
- `dsbus.spi.SPI` holds the firmware flash chip. `dsbus.spi.build_hle_firmware()`
  returns a flash chip filled with a synthesised image.
- `dsbus.firmware_loader.load_firmware(path, data)` opens a firmware dump from
  a path or from bytes. It returns `None` when there is nothing usable.
- `dsbus.touchscreen.Touchscreen` is the touchscreen and microphone controller.
- `dsbus.arith` holds the hardware divider (`divide`) and square root
  (`square_root`), along with `halt_mode_from` for decoding HALTCNT.

## Example

```python
from dsbus.arith import DivisionMode, divide, square_root
from dsbus.backup_file import BackupFile
from dsbus.eeprom import Eeprom

# Hardware division, 32-bit mode: (3, 1, False)
result, remainder, by_zero = divide(7, 2, DivisionMode.MODE0)

# 32-bit square root: 4
root = square_root(17, is_64bit=False)

# Read a byte back from a small EEPROM
chip = Eeprom(BackupFile(None, bytes(512), 512, False), 1)
chip.write(0x03, True)    # read from the low page
chip.write(0x00, True)    # address
chip.write(0x00, False)   # clock out one byte
print(chip.read())
```

## What it does not do

The package has no CPU cores, no GPU, no audio unit and no bus that ties the
pieces together; it offers no command to run. It keeps the gamecard control
registers, but it does not answer gamecard ROM commands, read a game's header
or decrypt encrypted gamecard traffic.