# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for resource path shortening."""

import pytest

from resopt import (
    MalformedTableError,
    PathNamespaceExhaustedError,
    optimal_shortened_length,
    shorten_file_name,
    shorten_file_paths,
)
from resopt.paths import SHORTENED_PATH_ALPHABET, path_digest
from restable import FileReference, ResourceConfigValue, StringPool


def _file_paths(table) -> list[str]:
    return [ref.path.value for ref in table.iter_file_references()]


def test_paths_001_token_length_switches_above_4000_references() -> None:
    assert optimal_shortened_length(1) == 2
    assert optimal_shortened_length(4000) == 2
    assert optimal_shortened_length(4001) == 3


def test_paths_002_token_is_built_from_low_six_bit_groups() -> None:
    path = "res/drawable/icon.png"
    digest = path_digest(path)

    token = shorten_file_name(path, 3)

    assert token == "".join(
        SHORTENED_PATH_ALPHABET[(digest >> shift) & 0x3F] for shift in (0, 6, 12)
    )
    assert shorten_file_name(path, 3) == token
    assert shorten_file_name(path, 2) == token[:2]


def test_paths_003_alphabet_is_path_safe_and_has_64_symbols() -> None:
    assert len(SHORTENED_PATH_ALPHABET) == 64
    assert len(set(SHORTENED_PATH_ALPHABET)) == 64
    assert "/" not in SHORTENED_PATH_ALPHABET
    assert "." not in SHORTENED_PATH_ALPHABET


def test_paths_004_colliding_tokens_get_increasing_suffixes_in_path_order(
    make_table, monkeypatch
) -> None:
    monkeypatch.setattr("resopt.paths.shorten_file_name", lambda path, num_chars: "xy")
    table = make_table(
        {
            "drawable": [
                ("icon3", 0x7F010003, ["c/icon3.png"], False),
                ("icon1", 0x7F010001, ["a/icon1.png"], False),
                ("icon2", 0x7F010002, ["b/icon2.png"], False),
            ]
        }
    )
    shortened_path_map: dict[str, str] = {}

    assert shorten_file_paths(table, shortened_path_map) is True

    assert shortened_path_map == {
        "a/icon1.png": "res/xy.png",
        "b/icon2.png": "res/xy0.png",
        "c/icon3.png": "res/xy1.png",
    }
    assert _file_paths(table) == ["res/xy1.png", "res/xy.png", "res/xy0.png"]


def test_paths_005_color_state_lists_are_left_untouched(make_table) -> None:
    table = make_table(
        {
            "color": [
                ("accent", 0x7F020001, ["res/color/accent.xml"], False),
                ("tint", 0x7F020002, ["res/color-v23/tint.xml"], False),
            ],
            "drawable": [("icon", 0x7F010001, ["res/drawable/icon.png"], False)],
        }
    )
    shortened_path_map: dict[str, str] = {}

    shorten_file_paths(table, shortened_path_map)

    assert set(shortened_path_map) == {"res/drawable/icon.png"}
    paths = _file_paths(table)
    assert "res/color/accent.xml" in paths
    assert "res/color-v23/tint.xml" in paths


def test_paths_006_shared_path_maps_once_and_rewrites_every_reference(
    make_table,
) -> None:
    table = make_table(
        {
            "drawable": [
                ("icon", 0x7F010001, ["res/drawable/icon.png"], False),
                ("icon_alias", 0x7F010002, ["res/drawable/icon.png"], False),
            ]
        }
    )
    shortened_path_map: dict[str, str] = {}

    shorten_file_paths(table, shortened_path_map)

    assert len(shortened_path_map) == 1
    shortened = shortened_path_map["res/drawable/icon.png"]
    assert _file_paths(table) == [shortened, shortened]


def test_paths_007_shortened_paths_are_unique(make_table) -> None:
    files = [f"res/drawable/image_{index}.png" for index in range(500)]
    table = make_table(
        {
            "drawable": [
                (f"image_{index}", 0x7F010000 + index, [path], False)
                for index, path in enumerate(files)
            ]
        }
    )
    shortened_path_map: dict[str, str] = {}

    shorten_file_paths(table, shortened_path_map)

    assert len(shortened_path_map) == 500
    assert len(set(shortened_path_map.values())) == 500
    assert all(value.startswith("res/") for value in shortened_path_map.values())
    assert all(value.endswith(".png") for value in shortened_path_map.values())


def test_paths_008_mapping_does_not_depend_on_table_order(make_table) -> None:
    specs = [
        (f"layout_{index}", 0x7F030000 + index, [f"res/layout/l{index}.xml"], False)
        for index in range(200)
    ]
    forward_map: dict[str, str] = {}
    reverse_map: dict[str, str] = {}

    shorten_file_paths(make_table({"layout": specs}), forward_map)
    shorten_file_paths(make_table({"layout": list(reversed(specs))}), reverse_map)

    assert forward_map == reverse_map


def test_paths_009_multi_part_extension_is_preserved(make_table) -> None:
    table = make_table(
        {"drawable": [("button", 0x7F010001, ["res/drawable/button.9.png"], False)]}
    )
    shortened_path_map: dict[str, str] = {}

    shorten_file_paths(table, shortened_path_map)

    shortened = shortened_path_map["res/drawable/button.9.png"]
    assert shortened.endswith(".9.png")
    assert len(shortened) == len("res/") + 2 + len(".9.png")


def test_paths_010_rewrite_appends_to_pool_and_keeps_context(make_table) -> None:
    table = make_table({"drawable": [("icon", 0x7F010001, [], False)]})
    entry = table.packages[0].types[0].entries[0]
    original_ref = table.string_pool.make_ref("res/drawable-hdpi/icon.png", "hdpi")
    entry.values.append(
        ResourceConfigValue(config="hdpi", value=FileReference(path=original_ref))
    )
    shortened_path_map: dict[str, str] = {}

    shorten_file_paths(table, shortened_path_map)

    new_ref = entry.values[0].value.path
    assert new_ref.context == "hdpi"
    assert new_ref.value == shortened_path_map["res/drawable-hdpi/icon.png"]
    assert "res/drawable-hdpi/icon.png" in table.string_pool.values()


def test_paths_011_foreign_pool_reference_is_fatal(make_table) -> None:
    table = make_table({"drawable": [("icon", 0x7F010001, [], False)]})
    foreign_ref = StringPool().make_ref("res/drawable/foreign.png")
    table.packages[0].types[0].entries[0].values.append(
        ResourceConfigValue(config="", value=FileReference(path=foreign_ref))
    )

    with pytest.raises(MalformedTableError):
        shorten_file_paths(table, {})


def test_paths_012_exhausted_namespace_is_fatal(make_table, monkeypatch) -> None:
    monkeypatch.setattr("resopt.paths.shorten_file_name", lambda path, num_chars: "x")
    monkeypatch.setattr("resopt.paths.optimal_shortened_length", lambda count: 0)
    table = make_table(
        {
            "drawable": [
                ("a", 0x7F010001, ["res/drawable/a.png"], False),
                ("b", 0x7F010002, ["res/drawable/b.png"], False),
                ("c", 0x7F010003, ["res/drawable/c.png"], False),
            ]
        }
    )

    with pytest.raises(PathNamespaceExhaustedError):
        shorten_file_paths(table, {})


def test_paths_013_digest_and_tokens_are_pinned() -> None:
    path = "res/drawable/icon.png"

    assert path_digest(path) == 0xD6E71602FD1565DA
    assert shorten_file_name(path, 2) == "aX"
    assert shorten_file_name(path, 3) == "aXW"


def _token_tail(path: str, shortened: str, num_chars: int) -> str:
    token = shorten_file_name(path, num_chars)
    assert shortened.startswith(f"res/{token}")
    return shortened[len("res/") + num_chars : -len(".png")]


def test_paths_014_more_than_4000_distinct_paths_use_three_char_tokens(
    make_table,
) -> None:
    files = [f"res/drawable/d{index}.png" for index in range(4001)]
    table = make_table(
        {
            "drawable": [
                (f"d{index}", 0x7F010000 + index, [path], False)
                for index, path in enumerate(files)
            ]
        }
    )
    shortened_path_map: dict[str, str] = {}

    shorten_file_paths(table, shortened_path_map)

    assert len(shortened_path_map) == 4001
    for path, shortened in shortened_path_map.items():
        tail = _token_tail(path, shortened, 3)
        assert tail == "" or tail.isdigit()


def test_paths_015_duplicate_references_do_not_raise_token_length(
    make_table,
) -> None:
    files = [f"res/drawable/d{index}.png" for index in range(4000)]
    specs = [
        (f"d{index}", 0x7F010000 + index, [path], False)
        for index, path in enumerate(files)
    ]
    specs.extend(
        (f"alias{index}", 0x7F020000 + index, [files[index], files[index]], False)
        for index in range(50)
    )
    table = make_table({"drawable": specs})
    shortened_path_map: dict[str, str] = {}

    shorten_file_paths(table, shortened_path_map)

    assert len(shortened_path_map) == 4000
    for path, shortened in shortened_path_map.items():
        tail = _token_tail(path, shortened, 2)
        assert tail == "" or tail.isdigit()
