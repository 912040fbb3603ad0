# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Shared, deduplicated string storage referenced throughout a resource table."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StringRef:
    """Reference one pooled string.

    Attributes:
        value: Referenced string content.
        context: Optional pool context (for example the owning configuration).
        index: Insertion index inside the owning pool.
    """

    value: str
    context: str | None
    index: int


class StringPool:
    """Append-only string pool deduplicated by ``(value, context)``."""

    def __init__(self) -> None:
        """Initialize an empty pool."""
        self._refs: list[StringRef] = []
        self._lookup: dict[tuple[str, str | None], StringRef] = {}

    def make_ref(self, value: str, context: str | None = None) -> StringRef:
        """Return the reference for ``value``, inserting it when missing.

        Args:
            value: String content.
            context: Optional pool context.

        Returns:
            Pool reference for the string.
        """
        key = (value, context)
        existing = self._lookup.get(key)
        if existing is not None:
            return existing
        ref = StringRef(value=value, context=context, index=len(self._refs))
        self._refs.append(ref)
        self._lookup[key] = ref
        return ref

    def owns(self, ref: StringRef) -> bool:
        """Check whether ``ref`` was issued by this pool."""
        return 0 <= ref.index < len(self._refs) and self._refs[ref.index] == ref

    def values(self) -> list[str]:
        """Return pooled strings in insertion order."""
        return [ref.value for ref in self._refs]

    def __len__(self) -> int:
        return len(self._refs)
