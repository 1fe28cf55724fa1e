"""
Error Types

Lookups by unknown id are NOT errors: they return None.
Exceptions are reserved for broken invariants and invalid configuration.
"""


class CodemapError(Exception):
    """Base class for all codemap errors."""


class GraphIntegrityError(CodemapError):
    """An edge or serialized graph references nodes the store does not own."""


class ConfigError(CodemapError):
    """Layout configuration is out of range or cannot be parsed."""
