# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for the resource table model."""

from restable.json_codec import (
    TableFormatError,
    dump_table,
    load_table,
    table_from_dict,
    table_to_dict,
)
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
    extract_res_file_path_parts,
)
from restable.string_pool import StringPool, StringRef

__all__ = [
    "FileReference",
    "Item",
    "OverlayableItem",
    "Reference",
    "ResourceConfigValue",
    "ResourceEntry",
    "ResourceId",
    "ResourceName",
    "ResourceTable",
    "ResourceTablePackage",
    "ResourceTableType",
    "StringPool",
    "StringRef",
    "StringValue",
    "TableFormatError",
    "dump_table",
    "extract_res_file_path_parts",
    "load_table",
    "table_from_dict",
    "table_to_dict",
]
