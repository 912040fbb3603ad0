# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Persist and read the de-obfuscation map written next to a built artifact."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from resopt.obfuscator import DeobfuscationMaps
from resopt.paths import PATH_DIGEST_ALGORITHM

logger = logging.getLogger(__name__)

OBFUSCATION_MAP_VERSION = 1


class ObfuscationMapError(RuntimeError):
    """Represent an unreadable or malformed de-obfuscation map."""


@dataclass(frozen=True)
class ObfuscationMap:
    """Reverse the transforms recorded for one built artifact.

    Args:
        shortened_paths: Original path to shortened path.
        resource_ids: Resource id to original entry name.
    """

    shortened_paths: dict[str, str]
    resource_ids: dict[int, str]
    _original_paths: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_original_paths",
            {short: original for original, short in self.shortened_paths.items()},
        )

    def original_path(self, shortened_path: str) -> str | None:
        """Return the original path for ``shortened_path`` when known."""
        return self._original_paths.get(shortened_path)

    def resource_name(self, resource_id: int) -> str | None:
        """Return the original entry name for ``resource_id`` when collapsed."""
        return self.resource_ids.get(resource_id)


def write_obfuscation_map(maps: DeobfuscationMaps, path: Path) -> None:
    """Write ``maps`` as a sorted JSON document.

    Args:
        maps: Maps produced by an obfuscation pass.
        path: Destination path.

    Raises:
        ObfuscationMapError: If the file cannot be written.
    """
    payload = {
        "version": OBFUSCATION_MAP_VERSION,
        "digest": PATH_DIGEST_ALGORITHM,
        "shortened_paths": dict(sorted(maps.shortened_path_map.items())),
        "resource_ids": {
            f"0x{resource_id:08x}": name
            for resource_id, name in sorted(maps.id_resource_map.items())
        },
    }
    tmp_path = path.with_suffix(f"{path.suffix}.tmp")
    try:
        tmp_path.write_text(f"{json.dumps(payload, indent=2)}\n", encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        logger.warning("Failed writing obfuscation map (path=%s error=%s)", path, exc)
        raise ObfuscationMapError(str(exc)) from exc
    logger.info(
        "Wrote obfuscation map",
        extra={
            "path": str(path),
            "paths": len(maps.shortened_path_map),
            "resource_ids": len(maps.id_resource_map),
        },
    )


def load_obfuscation_map(path: Path) -> ObfuscationMap:
    """Load a de-obfuscation map written by ``write_obfuscation_map``.

    Args:
        path: Map file path.

    Returns:
        Parsed map.

    Raises:
        ObfuscationMapError: If the file is unreadable or malformed.
    """
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ObfuscationMapError(
            f"Failed to read obfuscation map {path}: {exc}"
        ) from exc
    return _map_from_dict(document)


def _map_from_dict(document: Any) -> ObfuscationMap:
    if not isinstance(document, dict):
        raise ObfuscationMapError("Obfuscation map must be a JSON object")
    version = document.get("version")
    if version != OBFUSCATION_MAP_VERSION:
        raise ObfuscationMapError(f"Unsupported obfuscation map version: {version!r}")
    digest = document.get("digest")
    if digest != PATH_DIGEST_ALGORITHM:
        raise ObfuscationMapError(f"Unsupported path digest: {digest!r}")
    shortened_paths = document.get("shortened_paths", {})
    resource_ids = document.get("resource_ids", {})
    if not isinstance(shortened_paths, dict) or not isinstance(resource_ids, dict):
        raise ObfuscationMapError("Obfuscation map sections must be JSON objects")
    try:
        parsed_ids = {int(key, 16): str(name) for key, name in resource_ids.items()}
    except ValueError as exc:
        raise ObfuscationMapError(f"Invalid resource id: {exc}") from exc
    return ObfuscationMap(
        shortened_paths={
            str(key): str(value) for key, value in shortened_paths.items()
        },
        resource_ids=parsed_ids,
    )
