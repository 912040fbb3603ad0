# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Obfuscation options and resources config file parsing."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from restable import ResourceName

logger = logging.getLogger(__name__)

_COLLAPSE_DIRECTIVES: frozenset[str] = frozenset({"no_collapse", "no_obfuscate"})


class ConfigError(RuntimeError):
    """Represent an invalid resources config file."""


@dataclass(frozen=True)
class ObfuscationOptions:
    """Configure one obfuscation pass invocation.

    Args:
        shorten_resource_paths: Rewrite file-reference paths to short names.
        collapse_key_stringpool: Allow entry names to be collapsed.
        name_collapse_exemptions: Names that must never be collapsed.
    """

    shorten_resource_paths: bool = False
    collapse_key_stringpool: bool = False
    name_collapse_exemptions: frozenset[ResourceName] = field(
        default_factory=frozenset
    )


def load_resources_config(path: Path) -> frozenset[ResourceName]:
    """Load collapse exemptions from a resources config file.

    Args:
        path: Config file path.

    Returns:
        Resource names exempt from collapsing.

    Raises:
        ConfigError: If the file cannot be read or contains malformed lines.
    """
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read resources config {path}: {exc}") from exc
    return parse_resources_config(lines)


def parse_resources_config(lines: Iterable[str]) -> frozenset[ResourceName]:
    """Parse ``type/name#directive[,directive]`` lines.

    Args:
        lines: Config file lines.

    Returns:
        Resource names carrying a collapse exemption directive.

    Raises:
        ConfigError: If a line has no directive or an invalid resource name.
    """
    exemptions: set[ResourceName] = set()
    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        name_text, sep, directive_text = line.partition("#")
        if not sep:
            raise ConfigError(f"Line {line_number}: missing '#' directive: {line!r}")
        try:
            name = ResourceName.parse(name_text)
        except ValueError as exc:
            raise ConfigError(f"Line {line_number}: {exc}") from exc
        directive_text = directive_text.partition("#")[0]
        for raw_directive in directive_text.split(","):
            words = raw_directive.split()
            directive = words[0] if words else ""
            if directive in _COLLAPSE_DIRECTIVES:
                exemptions.add(name)
            elif directive:
                logger.warning(
                    "Ignoring unknown resources config directive",
                    extra={"line": line_number, "directive": directive},
                )
    return frozenset(exemptions)
