# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Decide which resource entry names may be collapsed from the key pool."""

import enum
import logging

from resopt.config import ObfuscationOptions
from restable import ResourceEntry, ResourceName, ResourceTable

logger = logging.getLogger(__name__)


class ObfuscationResult(enum.Enum):
    """Classify one entry name."""

    KEEP_EXEMPT = "keep_exempt"
    KEEP_OVERLAYABLE = "keep_overlayable"
    OBFUSCATED = "obfuscated"


def classify(
    options: ObfuscationOptions, type_name: str, entry: ResourceEntry
) -> ObfuscationResult:
    """Classify whether ``entry``'s name may be collapsed.

    Exemptions win over the overlayable marker: an exempt overlayable entry is
    reported as ``KEEP_EXEMPT``.

    Args:
        options: Pass options.
        type_name: Name of the type owning ``entry``.
        entry: Entry to classify.

    Returns:
        Classification for the entry.
    """
    resource_name = ResourceName(type=type_name, entry=entry.name)
    if (
        not options.collapse_key_stringpool
        or resource_name in options.name_collapse_exemptions
    ):
        return ObfuscationResult.KEEP_EXEMPT
    # Overlays resolve targets by name after flattening.
    if entry.overlayable_item is not None:
        return ObfuscationResult.KEEP_OVERLAYABLE
    return ObfuscationResult.OBFUSCATED


def collapse_key_string_pool(
    table: ResourceTable,
    options: ObfuscationOptions,
    id_resource_map: dict[int, str],
) -> bool:
    """Record the id to name mapping of every collapsible entry.

    Entries without an id or with an empty name are skipped entirely.

    Args:
        table: Resource table to inspect.
        options: Pass options.
        id_resource_map: Output map receiving resource id to original name.

    Returns:
        True when the pass completed.
    """
    if not options.collapse_key_stringpool:
        return True

    counts = {result: 0 for result in ObfuscationResult}
    for _, table_type, entry in table.iter_entries():
        if entry.id is None or not entry.name:
            continue
        result = classify(options, table_type.named_type, entry)
        counts[result] += 1
        if result is ObfuscationResult.OBFUSCATED:
            id_resource_map[entry.id.id] = entry.name

    logger.info(
        "Classified resource names",
        extra={result.value: count for result, count in counts.items()},
    )
    return True
