# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Shorten file-reference paths to deterministic, collision-free names."""

import hashlib
import logging

from resopt.errors import MalformedTableError, PathNamespaceExhaustedError
from restable import FileReference, ResourceTable, extract_res_file_path_parts

logger = logging.getLogger(__name__)

PATH_DIGEST_ALGORITHM = "blake2b-64"
SHORTENED_PATH_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
)
SHORTENED_PATH_DIR = "res/"
# The runtime detects color state lists by directory name.
COLOR_RESOURCE_PREFIX = "res/color"

_LARGE_TABLE_THRESHOLD = 4000


def path_digest(path: str) -> int:
    """Digest a path into an unsigned 64-bit integer.

    BLAKE2b with an 8-byte digest over the UTF-8 path, read big-endian. The
    value is stable across interpreters, hosts and runs.

    Args:
        path: Original resource file path.

    Returns:
        64-bit digest.
    """
    digest = hashlib.blake2b(path.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


def shorten_file_name(path: str, num_chars: int) -> str:
    """Derive a path-safe token from the digest of ``path``.

    Args:
        path: Original resource file path.
        num_chars: Token length.

    Returns:
        Token built from successive low 6-bit groups of the digest.
    """
    digest = path_digest(path)
    chars: list[str] = []
    for _ in range(num_chars):
        chars.append(SHORTENED_PATH_ALPHABET[digest & 0x3F])
        digest >>= 6
    return "".join(chars)


def optimal_shortened_length(num_resources: int) -> int:
    """Return the token length keeping expected collisions low.

    Args:
        num_resources: Number of distinct file references.

    Returns:
        Token length.
    """
    if num_resources > _LARGE_TABLE_THRESHOLD:
        return 3
    return 2


def get_shortened_path(
    shortened_filename: str, extension: str, collision_suffix: int | None = None
) -> str:
    """Build a shortened path candidate.

    Args:
        shortened_filename: Digest-derived token.
        extension: Original extension including the leading dot.
        collision_suffix: Decimal suffix appended after a collision.

    Returns:
        Candidate path under the shortened output directory.
    """
    suffix = "" if collision_suffix is None else str(collision_suffix)
    return f"{SHORTENED_PATH_DIR}{shortened_filename}{suffix}{extension}"


def shorten_file_paths(
    table: ResourceTable, shortened_path_map: dict[str, str]
) -> bool:
    """Rewrite every file reference path in ``table`` to a short path.

    Distinct paths are processed in lexicographic order, so colliding tokens
    always resolve to the same suffixes for the same table.

    Args:
        table: Resource table to rewrite in place.
        shortened_path_map: Output map receiving original to shortened paths.

    Returns:
        True when the pass completed.

    Raises:
        MalformedTableError: If a file reference path is not pooled in ``table``.
        PathNamespaceExhaustedError: If no free shortened path remains for a token.
    """
    refs_by_path: dict[str, list[FileReference]] = {}
    for file_ref in table.iter_file_references():
        if not table.string_pool.owns(file_ref.path):
            raise MalformedTableError(
                f"File reference path is not in the table string pool: "
                f"{file_ref.path.value!r}"
            )
        refs_by_path.setdefault(file_ref.path.value, []).append(file_ref)

    num_chars = optimal_shortened_length(len(refs_by_path))
    max_suffix = len(SHORTENED_PATH_ALPHABET) ** num_chars
    shortened_paths: set[str] = set()
    color_paths_skipped = 0
    collisions = 0

    for original_path in sorted(refs_by_path):
        res_subdir, _, extension = extract_res_file_path_parts(original_path)
        if res_subdir.startswith(COLOR_RESOURCE_PREFIX):
            color_paths_skipped += 1
            continue

        shortened_filename = shorten_file_name(original_path, num_chars)
        shortened_path = get_shortened_path(shortened_filename, extension)
        collision_suffix = 0
        while shortened_path in shortened_paths:
            if collision_suffix >= max_suffix:
                raise PathNamespaceExhaustedError(
                    f"No free shortened path for {original_path!r} "
                    f"after {collision_suffix} collisions"
                )
            shortened_path = get_shortened_path(
                shortened_filename, extension, collision_suffix
            )
            collision_suffix += 1
        if collision_suffix:
            collisions += 1
            logger.debug(
                "Resolved shortened path collision",
                extra={"path": original_path, "shortened": shortened_path},
            )

        shortened_paths.add(shortened_path)
        shortened_path_map[original_path] = shortened_path
        for file_ref in refs_by_path[original_path]:
            file_ref.path = table.string_pool.make_ref(
                shortened_path, file_ref.path.context
            )

    logger.info(
        "Shortened resource paths",
        extra={
            "paths": len(shortened_path_map),
            "color_paths_skipped": color_paths_skipped,
            "collisions": collisions,
            "token_length": num_chars,
        },
    )
    return True
