# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Read and write resource tables as JSON documents."""

import json
import logging
from pathlib import Path
from typing import Any

from restable.model import (
    FileReference,
    Item,
    OverlayableItem,
    Reference,
    ResourceConfigValue,
    ResourceEntry,
    ResourceId,
    ResourceName,
    ResourceTable,
    ResourceTablePackage,
    ResourceTableType,
    StringValue,
)
from restable.string_pool import StringPool

logger = logging.getLogger(__name__)


class TableFormatError(RuntimeError):
    """Represent a malformed resource table document."""


def load_table(path: Path) -> ResourceTable:
    """Load a resource table from a JSON file.

    Args:
        path: JSON document path.

    Returns:
        Parsed resource table.

    Raises:
        TableFormatError: If the file cannot be read or is malformed.
    """
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise TableFormatError(f"Failed to read table {path}: {exc}") from exc
    return table_from_dict(document)


def dump_table(table: ResourceTable, path: Path) -> None:
    """Write a resource table to a JSON file.

    Args:
        table: Resource table to write.
        path: Destination path.
    """
    payload = json.dumps(table_to_dict(table), indent=2, sort_keys=False)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp")
    tmp_path.write_text(f"{payload}\n", encoding="utf-8")
    tmp_path.replace(path)


def table_from_dict(document: Any) -> ResourceTable:
    """Build a resource table from a decoded JSON document.

    Args:
        document: Decoded JSON object.

    Returns:
        Resource table with a freshly populated string pool.

    Raises:
        TableFormatError: If required keys are missing or values are invalid.
    """
    if not isinstance(document, dict):
        raise TableFormatError("Table document must be a JSON object")
    pool = StringPool()
    packages: list[ResourceTablePackage] = []
    try:
        for raw_package in document.get("packages", []):
            types: list[ResourceTableType] = []
            for raw_type in raw_package.get("types", []):
                entries = [
                    _entry_from_dict(raw_entry, pool)
                    for raw_entry in raw_type.get("entries", [])
                ]
                types.append(
                    ResourceTableType(
                        named_type=raw_type["type"],
                        id=raw_type.get("id"),
                        entries=entries,
                    )
                )
            packages.append(
                ResourceTablePackage(
                    name=raw_package["name"],
                    id=raw_package.get("id"),
                    types=types,
                )
            )
    except (KeyError, TypeError, AttributeError, ValueError) as exc:
        raise TableFormatError(f"Malformed table document: {exc!r}") from exc
    logger.debug(
        "Loaded resource table",
        extra={"packages": len(packages), "pooled_strings": len(pool)},
    )
    return ResourceTable(packages=packages, string_pool=pool)


def table_to_dict(table: ResourceTable) -> dict[str, Any]:
    """Convert a resource table to a JSON-compatible dictionary."""
    return {
        "packages": [
            {
                "name": package.name,
                "id": package.id,
                "types": [
                    {
                        "type": table_type.named_type,
                        "id": table_type.id,
                        "entries": [
                            _entry_to_dict(entry) for entry in table_type.entries
                        ],
                    }
                    for table_type in package.types
                ],
            }
            for package in table.packages
        ]
    }


def _entry_from_dict(raw: dict[str, Any], pool: StringPool) -> ResourceEntry:
    raw_id = raw.get("id")
    resource_id = None
    if isinstance(raw_id, str):
        resource_id = ResourceId(int(raw_id, 16))
    elif isinstance(raw_id, int) and not isinstance(raw_id, bool):
        resource_id = ResourceId(raw_id)
    elif raw_id is not None:
        raise TableFormatError(f"Invalid resource id: {raw_id!r}")
    raw_overlayable = raw.get("overlayable")
    overlayable_item = None
    if raw_overlayable is not None:
        overlayable_item = OverlayableItem(
            overlayable=raw_overlayable["name"],
            policies=tuple(raw_overlayable.get("policies", [])),
        )
    values = [
        ResourceConfigValue(
            config=raw_value.get("config", ""),
            product=raw_value.get("product", ""),
            value=_item_from_dict(raw_value, pool),
        )
        for raw_value in raw.get("values", [])
    ]
    return ResourceEntry(
        name=raw.get("name", ""),
        id=resource_id,
        overlayable_item=overlayable_item,
        values=values,
    )


def _item_from_dict(raw: dict[str, Any], pool: StringPool) -> Item | None:
    if "file" in raw:
        return FileReference(
            path=pool.make_ref(raw["file"], raw.get("config") or None),
            file_type=raw.get("file_type"),
        )
    if "string" in raw:
        return StringValue(value=pool.make_ref(raw["string"]))
    if "reference" in raw:
        return Reference(name=ResourceName.parse(raw["reference"]))
    return None


def _entry_to_dict(entry: ResourceEntry) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": entry.name,
        "id": entry.id.to_hex() if entry.id is not None else None,
    }
    if entry.overlayable_item is not None:
        payload["overlayable"] = {
            "name": entry.overlayable_item.overlayable,
            "policies": list(entry.overlayable_item.policies),
        }
    payload["values"] = [_value_to_dict(value) for value in entry.values]
    return payload


def _value_to_dict(config_value: ResourceConfigValue) -> dict[str, Any]:
    payload: dict[str, Any] = {"config": config_value.config}
    if config_value.product:
        payload["product"] = config_value.product
    item = config_value.value
    if isinstance(item, FileReference):
        payload["file"] = item.path.value
        if item.file_type is not None:
            payload["file_type"] = item.file_type
    elif isinstance(item, StringValue):
        payload["string"] = item.value.value
    elif isinstance(item, Reference):
        payload["reference"] = str(item.name)
    return payload
