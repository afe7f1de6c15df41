"""
Host integration exports
"""

from denoresolve.host.plugin import (
    DenoPlugin,
    deep_merge,
    find_runtime_dts,
    rewrite_import_text,
    wrap_get_compilation_settings,
    wrap_get_completion_entry_details,
    wrap_get_script_file_names,
    wrap_resolve_module_names,
)

__all__ = [
    "DenoPlugin",
    "deep_merge",
    "find_runtime_dts",
    "rewrite_import_text",
    "wrap_get_compilation_settings",
    "wrap_get_completion_entry_details",
    "wrap_get_script_file_names",
    "wrap_resolve_module_names",
]
