import pytest

from launcher_sync.config import settings
from launcher_sync.domain.editing import EditingLauncherItem, is_editing_launcher_item
from launcher_sync.domain.models import (
    ClipboardEntry,
    DirEntry,
    DirOptions,
    LauncherEntry,
    Tab,
    WindowConfig,
    is_clipboard_item,
    is_launcher_item,
)
from launcher_sync.domain.register import ItemCategory, RegisterItem, WindowOperationConfig
from launcher_sync.services.conversion import (
    format_expanded_options,
    parse_expanded_options,
    register_item_from_persisted,
    to_editing_shape,
    to_persisted_item,
    to_register_item,
)

NOW = 1_700_000_000_000


def _register(category, **kwargs):
    base = dict(
        display_name="Name",
        path="",
        type="app",
        target_tab="data.json",
        target_file="data.json",
        item_category=category,
    )
    base.update(kwargs)
    return RegisterItem(**base)


# ----------------------------------------------------------------------
# Expanded option text
# ----------------------------------------------------------------------
def test_parse_expanded_options_scenario():
    options = parse_expanded_options("深さ:2, タイプ:file, 除外:tmp*")
    assert options == DirOptions(depth=2, types="file", exclude="tmp*")
    assert options.filter is None and options.prefix is None and options.suffix is None


def test_parse_expanded_options_depth_rules():
    assert parse_expanded_options("深さ:無制限").depth == -1
    assert parse_expanded_options("深さ:abc").depth == 0
    assert parse_expanded_options("深さ:1, 深さ:3").depth == 3


def test_parse_expanded_options_types_labels_and_unknown_segments():
    assert parse_expanded_options("タイプ:フォルダのみ").types == "folder"
    assert parse_expanded_options("タイプ:ファイルのみ, 何か:x").types == "file"
    assert parse_expanded_options("タイプ:everything").types == "both"
    assert parse_expanded_options("") == DirOptions()
    assert parse_expanded_options(None) == DirOptions()


def test_format_expanded_options_reads_back():
    options = DirOptions(depth=-1, types="file", filter="*.md", suffix=" (doc)")
    text = format_expanded_options(options)
    assert text == "深さ:無制限, タイプ:ファイルのみ, フィルター:*.md, 接尾辞: (doc)"
    parsed = parse_expanded_options(text)
    assert parsed.depth == -1 and parsed.types == "file" and parsed.filter == "*.md"


# ----------------------------------------------------------------------
# Editing shape -> RegisterItem
# ----------------------------------------------------------------------
def test_expanded_launcher_item_becomes_dir_register_item():
    shape = EditingLauncherItem(
        display_name="a.txt",
        path="C:/x/a.txt",
        source_file="data2.json",
        is_dir_expanded=True,
        expanded_from="C:/x",
        expanded_options="深さ:2, タイプ:file, 除外:tmp*",
    )
    reg = to_register_item(shape, [])
    assert reg.item_category is ItemCategory.DIR
    assert reg.display_name == "C:/x" and reg.path == "C:/x"
    assert reg.dir_options == DirOptions(depth=2, types="file", exclude="tmp*")
    assert reg.folder_processing == "expand"
    assert reg.target_file == "data2.json"


def test_expanded_item_without_option_text_gets_default_options():
    shape = EditingLauncherItem(
        display_name="a.txt",
        path="C:/x/a.txt",
        is_dir_expanded=True,
        expanded_from="C:/x",
        expanded_options="",
    )
    assert to_register_item(shape, []).dir_options == DirOptions(depth=0, types="both")


def test_target_defaults_to_first_tab_then_configured_default():
    shape = EditingLauncherItem("Code", "code.exe")
    assert to_register_item(shape, [Tab("Main", ("data3.json", "data.json"))]).target_file == "data3.json"
    assert to_register_item(shape, []).target_tab == settings.DEFAULT_DATA_FILE


def test_launcher_shape_detects_item_type_and_folder_processing():
    shape = to_editing_shape(LauncherEntry("Docs", "C:\\docs\\"), "data.json", 1)
    assert is_editing_launcher_item(shape)
    assert shape.item_type == "folder"
    reg = to_register_item(shape)
    assert reg.folder_processing == "folder"


def test_launcher_from_folder_expansion_is_flagged():
    directive = DirEntry("C:/x", DirOptions(depth=1))
    shape = to_editing_shape(LauncherEntry("a.txt", "C:/x/a.txt"), "data.json", 2, expanded=directive)
    assert shape.is_dir_expanded
    assert shape.expanded_from == "C:/x"
    assert shape.expanded_options == "深さ:1, タイプ:ファイルとフォルダ"


# ----------------------------------------------------------------------
# Round trips
# ----------------------------------------------------------------------
ROUND_TRIP_ITEMS = [
    _register(
        ItemCategory.ITEM,
        display_name="Code",
        path="C:/code.exe",
        args="--new-window",
        custom_icon="code.png",
        window_config=WindowConfig("Visual Studio Code", x=0),
        memo="editor",
    ),
    _register(
        ItemCategory.DIR,
        display_name="C:/x",
        path="C:/x",
        type="folder",
        folder_processing="expand",
        dir_options=DirOptions(depth=2, types="file", exclude="tmp*"),
    ),
    _register(ItemCategory.GROUP, display_name="Morning", group_item_names=["Mail", "Chat"], memo="daily"),
    _register(
        ItemCategory.WINDOW,
        display_name="Editor",
        window_operation_config=WindowOperationConfig("Editor", "Code", x=1, activate_window=True),
    ),
    _register(
        ItemCategory.CLIPBOARD,
        display_name="Snippet",
        type="clipboard",
        clipboard_data_ref="clip-1.json",
        clipboard_formats=["text", "html"],
        clipboard_saved_at=NOW - 10,
        clipboard_preview="hello",
        custom_icon="clip.png",
    ),
]


@pytest.mark.parametrize("reg", ROUND_TRIP_ITEMS, ids=lambda r: r.item_category.value)
def test_register_persisted_register_round_trip(reg):
    persisted = to_persisted_item(reg, existing_id="id-1", now_ms=NOW)
    assert persisted.id == "id-1"
    shape = to_editing_shape(persisted, "data.json", 1)
    assert to_register_item(shape, []) == reg


def test_to_persisted_item_stamps_and_assigns_temp_id():
    item = to_persisted_item(_register(ItemCategory.ITEM, path="a.exe", memo=""), now_ms=NOW)
    assert is_launcher_item(item)
    assert item.id == f"temp-{NOW}"
    assert item.updated_at == NOW
    assert item.memo is None


def test_to_persisted_item_copies_only_relevant_fields():
    reg = _register(ItemCategory.ITEM, path="a.exe", group_item_names=["x"], clipboard_data_ref="r")
    item = to_persisted_item(reg, now_ms=NOW)
    assert item == LauncherEntry("Name", "a.exe", id=f"temp-{NOW}", updated_at=NOW)


def test_clipboard_saved_at_defaults_to_now():
    item = to_persisted_item(_register(ItemCategory.CLIPBOARD, clipboard_data_ref="c"), now_ms=NOW)
    assert is_clipboard_item(item)
    assert item.saved_at == NOW
    assert item.formats == ()


def test_window_without_config_keeps_display_name():
    item = to_persisted_item(_register(ItemCategory.WINDOW, display_name="W"), now_ms=NOW)
    assert item.display_name == "W"
    assert item.window_title == ""


def test_register_item_from_persisted_dir_entry():
    reg = register_item_from_persisted(DirEntry("C:/x"), "data2.json")
    assert reg.item_category is ItemCategory.DIR
    assert reg.dir_options is None
    assert reg.target_file == "data2.json"


def test_register_item_from_persisted_clipboard():
    entry = ClipboardEntry("Snip", "c.json", 5, ("text",), memo="m")
    reg = register_item_from_persisted(entry, None, [Tab("Main", ("data.json",))])
    assert reg.item_category is ItemCategory.CLIPBOARD
    assert reg.clipboard_formats == ["text"]
    assert reg.memo == "m"
    assert reg.target_file == "data.json"
