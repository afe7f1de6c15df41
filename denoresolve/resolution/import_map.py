"""
Import map loading and caching

An import map is a JSON document of the form {"imports": {prefix: replacement}}.
Parsed maps are cached per (absolute path, modification time) so that editing
the file is picked up without any explicit invalidation
"""

import json
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from denoresolve.common.file_helpers import FileDecodeError, file_mtime_ms, safe_json_load
from denoresolve.resolution.errors import ImportMapNotFoundError, ImportMapParseError


@dataclass(frozen=True)
class ImportMap:
    """
    Parsed import map

    Attributes:
        imports: Specifier prefix to replacement prefix, in document order
        source: Path the map was loaded from (informational)

    Instances compare equal by content and cannot be used as dict keys or set members
    """

    imports: Mapping[str, str] = field(default_factory=dict)
    source: str = ""

    # Compared by value but unhashable; the read-only mapping has no hash
    __hash__ = None

    def __post_init__(self):
        # Freeze the mapping; dict preserves document order
        object.__setattr__(self, "imports", MappingProxyType(dict(self.imports)))

    @classmethod
    def from_data(cls, data, source=""):
        """
        Build an ImportMap from decoded JSON

        Args:
            data (object): Decoded JSON document
            source (str): Path used in error messages

        Raises:
            ImportMapParseError: If the document lacks an 'imports' object of strings
        """
        if not isinstance(data, dict):
            raise ImportMapParseError(source, "top-level value must be an object")
        imports = data.get("imports")
        if not isinstance(imports, dict):
            raise ImportMapParseError(source, "missing 'imports' object")
        for key, value in imports.items():
            if not isinstance(value, str):
                raise ImportMapParseError(source, f"value for '{key}' must be a string")
        return cls(imports=imports, source=source)

    def substitute(self, specifier):
        """
        Replace the first matching key prefix (document order) with its value

        Keys are literal prefixes, not patterns. Unmatched specifiers are returned unchanged
        """
        for key, value in self.imports.items():
            if specifier.startswith(key):
                return value + specifier[len(key) :]
        return specifier


class ImportMapStore:
    """
    Loads import maps and caches them by absolute path and modification time

    Entries are never evicted; a changed modification time produces a new,
    independent entry rather than replacing the old one
    """

    def __init__(self, logger=None):
        """
        Args:
            logger (Logger): Optional logger for cache activity
        """
        self.logger = logger
        self._cache = {}

    def __len__(self):
        return len(self._cache)

    def __contains__(self, cache_key):
        return cache_key in self._cache

    @staticmethod
    def cache_key(path, mtime_ms):
        return f"{path}-{mtime_ms}"

    def load(self, path):
        """
        Load an import map, reusing the cached parse when the file is unchanged

        Args:
            path (str): Path to the import map file

        Returns:
            ImportMap instance (the same object for repeated loads of an unchanged file)

        Raises:
            ImportMapNotFoundError: If the file does not exist
            ImportMapParseError: If the content is not valid UTF-8 JSON or has the wrong shape
        """
        abs_path = os.path.abspath(path)
        try:
            mtime_ms = file_mtime_ms(abs_path)
        except FileNotFoundError:
            raise ImportMapNotFoundError(abs_path)

        key = self.cache_key(abs_path, mtime_ms)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            data = safe_json_load(abs_path)
        except FileNotFoundError:
            raise ImportMapNotFoundError(abs_path)
        except (json.JSONDecodeError, FileDecodeError) as e:
            raise ImportMapParseError(abs_path, str(e))

        import_map = ImportMap.from_data(data, source=abs_path)
        self._cache[key] = import_map
        if self.logger:
            self.logger.debug(f"Cached import map {key} ({len(import_map.imports)} entries)")
        return import_map
