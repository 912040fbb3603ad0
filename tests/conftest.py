import sys
from collections.abc import Callable
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()

from restable import (  # noqa: E402
    FileReference,
    OverlayableItem,
    ResourceConfigValue,
    ResourceEntry,
    ResourceId,
    ResourceTable,
    ResourceTablePackage,
    ResourceTableType,
)

EntrySpec = tuple[str, int | None, list[str], bool]


@pytest.fixture
def make_table() -> Callable[[dict[str, list[EntrySpec]]], ResourceTable]:
    """Build a one-package table from ``{type: [(name, id, files, overlayable)]}``."""

    def _build(types: dict[str, list[EntrySpec]]) -> ResourceTable:
        table = ResourceTable()
        package = ResourceTablePackage(name="com.example.app", id=0x7F)
        for type_name, entry_specs in types.items():
            table_type = ResourceTableType(named_type=type_name)
            for name, resource_id, files, overlayable in entry_specs:
                entry = ResourceEntry(
                    name=name,
                    id=ResourceId(resource_id) if resource_id is not None else None,
                    overlayable_item=(
                        OverlayableItem(overlayable="Theme") if overlayable else None
                    ),
                )
                for config, file_path in enumerate(files):
                    entry.values.append(
                        ResourceConfigValue(
                            config=f"v{config}" if config else "",
                            value=FileReference(
                                path=table.string_pool.make_ref(file_path)
                            ),
                        )
                    )
                table_type.entries.append(entry)
            package.types.append(table_type)
        table.packages.append(package)
        return table

    return _build
