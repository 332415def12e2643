"""Test utilities for the regquery test suite.

Builds the sample hive used across unit and integration tests.
"""

from datetime import datetime, timezone

from regquery.encoding import hex_rendering
from regquery.hive import Key, Value

# Last write times of the sample hive's keys
T0 = datetime(2020, 6, 1, tzinfo=timezone.utc)
T1 = datetime(2020, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
T2 = datetime(2021, 1, 1, tzinfo=timezone.utc)
T3 = datetime(2021, 6, 15, 12, 0, tzinfo=timezone.utc)

UPDATER_RAW = b"ABC" + b"\x00" * 297
BLOB_RAW = b"\x02" * 8
BLOB_SLACK = b"pass"


def build_sample_hive() -> Key:
    """Build the sample key tree.

    ::

        ROOT                     T0
        +-- Software             T1   (default)
        |   +-- Microsoft        T2   Version (50 bytes)
        |   +-- Run              T3   OneDrive (150 bytes), Updater (300 bytes)
        +-- System               no last write time, Blob (8 bytes, slack "pass")

    """
    version = Value("Version", "RegSZ", raw=b"\x00" * 50, data_text="10.0")
    one_drive = Value(
        "OneDrive",
        "RegSZ",
        raw=b"\x01" * 150,
        data_text="C:\\Program Files\\Microsoft OneDrive\\OneDrive.exe /background",
    )
    updater = Value("Updater", "RegBinary", raw=UPDATER_RAW, data_text=hex_rendering(UPDATER_RAW))
    blob = Value("Blob", "RegBinary", raw=BLOB_RAW, data_text=hex_rendering(BLOB_RAW), slack=BLOB_SLACK)
    default = Value("(default)", "RegSZ")

    microsoft = Key("ROOT\\Software\\Microsoft", "Microsoft", last_write=T2, values=(version,))
    run = Key("ROOT\\Software\\Run", "Run", last_write=T3, values=(one_drive, updater))
    software = Key("ROOT\\Software", "Software", last_write=T1, values=(default,), subkeys=(microsoft, run))
    system = Key("ROOT\\System", "System", values=(blob,))
    return Key("ROOT", "ROOT", last_write=T0, subkeys=(software, system))
