"""Global configuration and constants for the item synchronization layer."""

from __future__ import annotations

import os
from typing import Final

# Data file used when neither the item nor the tab configuration names one
DEFAULT_DATA_FILE: Final = os.environ.get("LAUNCHER_SYNC_DEFAULT_DATA_FILE", "data.json")

# File that must stay reachable from at least one tab
REQUIRED_DATA_FILE: Final = os.environ.get("LAUNCHER_SYNC_REQUIRED_DATA_FILE", DEFAULT_DATA_FILE)

ITEM_ID_LENGTH: Final = 8
TEMP_ID_PREFIX: Final = "temp-"

COMMENT_PREFIX: Final = "//"
DIRECTIVE_KEYWORDS: Final = ("dir", "group", "window", "clipboard")

# Sort placeholder for empty lines (matches the grid's display text)
EMPTY_LINE_PLACEHOLDER: Final = "(空行)"

# Expanded folder options as rendered in the launch list ("深さ:2, タイプ:ファイルのみ")
DIR_OPTION_DEPTH_LABEL: Final = "深さ:"
DIR_OPTION_TYPES_LABEL: Final = "タイプ:"
DIR_OPTION_FILTER_LABEL: Final = "フィルター:"
DIR_OPTION_EXCLUDE_LABEL: Final = "除外:"
DIR_OPTION_PREFIX_LABEL: Final = "接頭辞:"
DIR_OPTION_SUFFIX_LABEL: Final = "接尾辞:"
DIR_DEPTH_UNLIMITED_LABEL: Final = "無制限"
DIR_TYPES_LABELS: Final = {
    "file": "ファイルのみ",
    "folder": "フォルダのみ",
    "both": "ファイルとフォルダ",
}

# Default tab names derived from data file names (data.json / data2.json ...)
MAIN_TAB_NAME: Final = "メイン"
SUB_TAB_NAME_PREFIX: Final = "サブ"
