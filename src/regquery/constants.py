#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for regquery.

Constants are organized by category:
1. Type Definitions - Literal types shared across modules
2. Output - Rendering defaults
3. Highlighting - Default colors for search term highlighting
4. Hive - Registry format constants used by the hive stores
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# =============================================================================
# Output
# =============================================================================

# Separator between path segments in registry key paths
KEY_PATH_SEPARATOR = "\\"

# Separator between bytes in hex renderings of binary data
HEX_BYTE_SEPARATOR = "-"

# Stand-in for a missing last write time when sorting
ZERO_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)

NOTHING_TO_DO_MESSAGE = "Nothing to do! =("

DEFAULT_LOG_LEVEL: LogLevelName = "INFO"

# =============================================================================
# Highlighting
# =============================================================================

DEFAULT_HIGHLIGHT_FOREGROUND = "red"
DEFAULT_HIGHLIGHT_BACKGROUND = "green"

# =============================================================================
# Hive
# =============================================================================

# Value data lengths with this bit set are stored inside the VK record itself
RESIDENT_DATA_FLAG = 0x80000000

# Largest value data stored in a single cell; bigger data uses a DB record
MAX_SINGLE_CELL_DATA = 0x3FD8

# =============================================================================
# Configuration
# =============================================================================

ENV_CONFIG_VAR = "REGQUERY_CONFIG"
