"""
Project configuration discovery and import map resolution

Finds the nearest tsconfig-style configuration above a project directory,
reads its 'denoOptions.importMap' pointer, and builds the specifier rewriting
function for the referenced import map
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from denoresolve.common.defaults import ResolutionConfig
from denoresolve.common.file_helpers import FileDecodeError, load_jsonc
from denoresolve.resolution.errors import ImportMapNotFoundError, ProjectConfigError


def identity(specifier):
    return specifier


@dataclass
class ProjectConfig:
    """
    Parsed project configuration

    Attributes:
        path: Absolute path of the configuration file
        data: Decoded configuration document
    """

    path: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def directory(self):
        return os.path.dirname(self.path)

    @property
    def deno_options(self):
        options = self.data.get("denoOptions")
        return options if isinstance(options, dict) else {}

    @property
    def import_map_path(self) -> Optional[str]:
        """
        Absolute path of 'denoOptions.importMap', resolved against the config file's directory
        """
        import_map = self.deno_options.get("importMap")
        if not import_map or not isinstance(import_map, str):
            return None
        return os.path.abspath(os.path.join(self.directory, import_map))


def find_project_config(directory, filenames=None):
    """
    Search upward from a directory for the nearest project configuration file

    Args:
        directory (str): Starting directory; a file path starts from its parent
        filenames (sequence): Candidate file names checked in each directory
            (defaults to ResolutionConfig.PROJECT_CONFIG_FILENAMES)

    Returns:
        Absolute path of the configuration file, or None if none exists up to the root
    """
    filenames = filenames or ResolutionConfig.PROJECT_CONFIG_FILENAMES
    current = os.path.abspath(directory)
    if os.path.isfile(current):
        current = os.path.dirname(current)

    while True:
        for name in filenames:
            candidate = os.path.join(current, name)
            if os.path.isfile(candidate):
                return candidate
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def load_project_config(path):
    """
    Load a project configuration file

    Comments, trailing commas and a BOM are tolerated; an empty file is an empty config

    Raises:
        ProjectConfigError: If the file is not valid UTF-8 JSON or not an object
    """
    abs_path = os.path.abspath(path)
    try:
        data = load_jsonc(abs_path)
    except (json.JSONDecodeError, FileDecodeError) as e:
        raise ProjectConfigError(abs_path, str(e))
    if not isinstance(data, dict):
        raise ProjectConfigError(abs_path, "top-level value must be an object")
    return ProjectConfig(path=abs_path, data=data)


def build_import_map_transform(project_directory, store, logger=None):
    """
    Build the specifier rewriting function for a project's import map

    Falls back to the identity function when no configuration is found, when it
    names no import map, or when the named import map does not exist

    Args:
        project_directory (str): Directory the configuration search starts from
        store (ImportMapStore): Store used to load (and cache) the import map
        logger (Logger): Optional logger

    Returns:
        Callable mapping a specifier to its substituted form

    Raises:
        ImportMapParseError: If the import map exists but is malformed
        ProjectConfigError: If the configuration file is malformed
    """
    config_path = find_project_config(project_directory)
    if logger:
        logger.info(f"config path: {config_path}")

    if config_path is None:
        return identity

    project_config = load_project_config(config_path)
    import_map_path = project_config.import_map_path
    if import_map_path is None:
        return identity

    try:
        import_map = store.load(import_map_path)
    except ImportMapNotFoundError as e:
        if logger:
            logger.warning(str(e))
        return identity

    def transform(specifier):
        substituted = import_map.substitute(specifier)
        if logger and substituted != specifier:
            logger.debug(f'import map "{specifier}" -> "{substituted}"')
        return substituted

    transform.import_map = import_map
    return transform
