# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Run the name collapsing and path shortening passes over a resource table."""

import logging
from dataclasses import dataclass, field

from resopt.config import ObfuscationOptions
from resopt.naming import collapse_key_string_pool
from resopt.paths import shorten_file_paths
from restable import ResourceTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeobfuscationMaps:
    """Store the reverse mappings produced by one pass.

    Args:
        shortened_path_map: Original path to shortened path.
        id_resource_map: Resource id to original entry name.
    """

    shortened_path_map: dict[str, str] = field(default_factory=dict)
    id_resource_map: dict[int, str] = field(default_factory=dict)


class Obfuscator:
    """Obfuscate resource names and file paths of a resource table."""

    def __init__(self, options: ObfuscationOptions) -> None:
        """Initialize the obfuscator.

        Args:
            options: Immutable pass options.
        """
        self._options = options
        self._maps = DeobfuscationMaps()

    def run(self, table: ResourceTable) -> bool:
        """Run the enabled passes over ``table``.

        Maps from a previous call are discarded.

        Args:
            table: Resource table, rewritten in place.

        Returns:
            True when every enabled pass completed.

        Raises:
            ObfuscationError: If a pass hits a fatal condition.
        """
        self._maps = DeobfuscationMaps()
        if not collapse_key_string_pool(
            table, self._options, self._maps.id_resource_map
        ):
            return False
        if self._options.shorten_resource_paths:
            return shorten_file_paths(table, self._maps.shortened_path_map)
        return True

    def has_output(self) -> bool:
        """Tell whether a de-obfuscation map has to be written."""
        return (
            self._options.shorten_resource_paths
            or self._options.collapse_key_stringpool
        )

    def maps(self) -> DeobfuscationMaps:
        """Return the maps populated by the last ``run``."""
        return self._maps
