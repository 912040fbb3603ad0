# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Resource table object model: packages, types, entries and values."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from restable.string_pool import StringPool, StringRef


@dataclass(frozen=True, order=True)
class ResourceName:
    """Identify a resource by its type and entry name.

    Attributes:
        type: Resource type name, for example ``drawable``.
        entry: Entry name within the type.
    """

    type: str
    entry: str

    @classmethod
    def parse(cls, text: str) -> "ResourceName":
        """Parse a ``type/entry`` string.

        Args:
            text: Resource name text.

        Returns:
            Parsed resource name.

        Raises:
            ValueError: If either part is missing.
        """
        type_name, sep, entry = text.strip().partition("/")
        if not sep or not type_name or not entry:
            raise ValueError(f"Invalid resource name: {text!r}")
        return cls(type=type_name, entry=entry)

    def __str__(self) -> str:
        return f"{self.type}/{self.entry}"


@dataclass(frozen=True)
class ResourceId:
    """Represent a full ``0xPPTTEEEE`` resource identifier."""

    id: int

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not 0 <= self.id <= 0xFFFFFFFF:
            raise ValueError(f"Resource id out of range: {self.id!r}")

    @property
    def package_id(self) -> int:
        return (self.id >> 24) & 0xFF

    @property
    def type_id(self) -> int:
        return (self.id >> 16) & 0xFF

    @property
    def entry_id(self) -> int:
        return self.id & 0xFFFF

    def to_hex(self) -> str:
        return f"0x{self.id:08x}"


@dataclass(frozen=True)
class OverlayableItem:
    """Mark an entry as replaceable by a runtime overlay.

    Attributes:
        overlayable: Name of the overlayable declaration.
        policies: Overlay policies that may target this entry.
    """

    overlayable: str
    policies: tuple[str, ...] = ()


class Item:
    """Base class for values held by a configuration variant."""


@dataclass
class FileReference(Item):
    """Reference a file-backed resource by pooled path.

    Attributes:
        path: Pooled path string, for example ``res/drawable/icon.png``.
        file_type: Optional file type hint (``png``, ``xml``, ...).
    """

    path: StringRef
    file_type: str | None = None


@dataclass
class StringValue(Item):
    """Hold an inline pooled string value."""

    value: StringRef


@dataclass
class Reference(Item):
    """Point at another resource by name."""

    name: ResourceName


@dataclass
class ResourceConfigValue:
    """Hold one per-configuration variant of an entry."""

    config: str
    value: Item | None
    product: str = ""


@dataclass
class ResourceEntry:
    """Represent one named resource inside a type."""

    name: str
    id: ResourceId | None = None
    overlayable_item: OverlayableItem | None = None
    values: list[ResourceConfigValue] = field(default_factory=list)


@dataclass
class ResourceTableType:
    """Group entries of one resource type."""

    named_type: str
    id: int | None = None
    entries: list[ResourceEntry] = field(default_factory=list)


@dataclass
class ResourceTablePackage:
    """Group resource types of one package."""

    name: str
    id: int | None = None
    types: list[ResourceTableType] = field(default_factory=list)


@dataclass
class ResourceTable:
    """Hold all resolved packages and the shared string pool."""

    packages: list[ResourceTablePackage] = field(default_factory=list)
    string_pool: StringPool = field(default_factory=StringPool)

    def iter_entries(
        self,
    ) -> Iterator[tuple[ResourceTablePackage, ResourceTableType, ResourceEntry]]:
        """Yield every entry in package, type, entry container order."""
        for package in self.packages:
            for table_type in package.types:
                for entry in table_type.entries:
                    yield package, table_type, entry

    def iter_file_references(self) -> Iterator[FileReference]:
        """Yield every file reference held by any configuration value."""
        for _, _, entry in self.iter_entries():
            for config_value in entry.values:
                if isinstance(config_value.value, FileReference):
                    yield config_value.value


def extract_res_file_path_parts(path: str) -> tuple[str, str, str]:
    """Split a resource file path into subdirectory, stem and extension.

    The subdirectory keeps its trailing slash and the extension starts at the
    first dot of the file name, so ``res/drawable/btn.9.png`` splits into
    ``("res/drawable/", "btn", ".9.png")``.

    Args:
        path: Resource file path.

    Returns:
        Tuple of subdirectory, file stem and extension.
    """
    subdir, _, filename = path.rpartition("/")
    if subdir or path.startswith("/"):
        subdir = f"{subdir}/"
    stem, dot, extension = filename.partition(".")
    return subdir, stem, f"{dot}{extension}"
