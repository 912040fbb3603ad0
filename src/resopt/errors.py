# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Fatal failures raised by the resource obfuscation pass."""


class ObfuscationError(RuntimeError):
    """Represent a fatal obfuscation pass failure."""


class PathNamespaceExhaustedError(ObfuscationError):
    """Represent exhaustion of the shortened path namespace."""


class MalformedTableError(ObfuscationError):
    """Represent a table reference the pass cannot resolve."""
