"""
Common module exports
"""

from denoresolve.common.defaults import (
    CompilerDefaults,
    ConfigOverride,
    ResolutionConfig,
    ResourceLimits,
    apply_config_overrides,
)
from denoresolve.common.file_helpers import (
    FileDecodeError,
    FileOperationError,
    load_jsonc,
    read_file_content,
    safe_json_load,
)
from denoresolve.common.utils import Logger, get_logger

__all__ = [
    "Logger",
    "get_logger",
    "ResolutionConfig",
    "CompilerDefaults",
    "ResourceLimits",
    "ConfigOverride",
    "apply_config_overrides",
    "FileDecodeError",
    "FileOperationError",
    "load_jsonc",
    "read_file_content",
    "safe_json_load",
]
