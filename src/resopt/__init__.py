# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for resource obfuscation components."""

from resopt.config import (
    ConfigError,
    ObfuscationOptions,
    load_resources_config,
    parse_resources_config,
)
from resopt.deobfuscation import (
    ObfuscationMap,
    ObfuscationMapError,
    load_obfuscation_map,
    write_obfuscation_map,
)
from resopt.errors import (
    MalformedTableError,
    ObfuscationError,
    PathNamespaceExhaustedError,
)
from resopt.naming import ObfuscationResult, classify, collapse_key_string_pool
from resopt.obfuscator import DeobfuscationMaps, Obfuscator
from resopt.paths import (
    optimal_shortened_length,
    shorten_file_name,
    shorten_file_paths,
)

__all__ = [
    "ConfigError",
    "DeobfuscationMaps",
    "MalformedTableError",
    "ObfuscationError",
    "ObfuscationMap",
    "ObfuscationMapError",
    "ObfuscationOptions",
    "ObfuscationResult",
    "Obfuscator",
    "PathNamespaceExhaustedError",
    "classify",
    "collapse_key_string_pool",
    "load_obfuscation_map",
    "load_resources_config",
    "optimal_shortened_length",
    "parse_resources_config",
    "shorten_file_name",
    "shorten_file_paths",
    "write_obfuscation_map",
]
