"""regquery - query offline Windows registry hives.

Find keys and values in a hive file by name, last write time, data size or
data content, dump a key or value, and export a value's raw data.

Examples
--------
From the command line::

    $ regquery --Hive NTUSER.DAT --sk run
    $ regquery --Hive SYSTEM --KeyName "ControlSet001\\Services" --Recursive
    $ regquery --Hive SOFTWARE --StartDate "2021-01-01" --Sort

From Python:

    >>> from regquery.hive import open_hive_store
    >>> store = open_hive_store("NTUSER.DAT")
    >>> store.parse()
    >>> hits = store.find_in_key_name("run", is_regex=False)

"""

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        f"regquery requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

__all__ = ["__version__"]
