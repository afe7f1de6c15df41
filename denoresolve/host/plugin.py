"""
Language service host integration

Each wrapper receives the host's default implementation and returns an
augmented one that delegates to it, so the plugin composes with whatever the
host already does. DenoPlugin installs all wrappers onto a host object
"""

import copy
import os
import re
import sys

from denoresolve.common.defaults import CompilerDefaults, ResolutionConfig
from denoresolve.common.utils import Logger
from denoresolve.resolution.pipeline import ResolverContext

PLUGIN_PACKAGE = "typescript-deno-plugin"

# Relative auto-imports suggested by the host omit the extension Deno requires
_RELATIVE_IMPORT_REGEX = re.compile(r"^(import .* from ['\"])(\..*)(['\"];\n)", re.IGNORECASE)


def deep_merge(base, override):
    """
    Merge two settings dictionaries recursively without mutating either

    Values from `override` win; nested dictionaries are merged, anything else
    (including lists) is replaced

    Args:
        base (dict): Default settings
        override (dict): Settings taking precedence

    Returns:
        New merged dictionary
    """
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def rewrite_import_text(text):
    """
    Append '.ts' to the module of a relative import statement

    Example:
        "import { a } from './a';\\n" -> "import { a } from './a.ts';\\n"
    """
    return _RELATIVE_IMPORT_REGEX.sub(r"\1\2.ts\3", text, count=1)


def find_runtime_dts(deno_dir, project_directory, bundled_dts_path=None):
    """
    Locate the Deno runtime declaration file

    Lookup order: an explicitly configured path, the global copy in the Deno
    directory, then the copy shipped with the plugin in node_modules

    Returns:
        Path of the first existing declaration file, or None
    """
    candidates = []
    if bundled_dts_path:
        candidates.append(bundled_dts_path)
    candidates.append(os.path.join(deno_dir, ResolutionConfig.RUNTIME_DTS_FILENAME))
    if project_directory:
        candidates.append(
            os.path.join(
                project_directory, "node_modules", PLUGIN_PACKAGE, "lib", ResolutionConfig.RUNTIME_DTS_FILENAME
            )
        )

    for candidate in candidates:
        if os.path.exists(candidate):
            return os.path.abspath(candidate)
    return None


def _as_callable(value):
    return value if callable(value) else (lambda: value)


def wrap_resolve_module_names(default_fn, context, project_directory_fn=None):
    """
    Wrap the host's module resolution so specifiers are rewritten first

    Args:
        default_fn (callable): Host implementation taking (module_names, containing_file, *args)
        context (ResolverContext): Resolution state for the project
        project_directory_fn (callable|str): Current project directory, re-read on every call

    Returns:
        Callable with the same signature as default_fn
    """
    directory_fn = _as_callable(project_directory_fn) if project_directory_fn is not None else None

    def resolve_module_names(module_names, containing_file, *args, **kwargs):
        if directory_fn is not None:
            context.set_project_directory(directory_fn())
        rewritten = context.resolve_batch(module_names)
        if context.logger:
            context.logger.debug(f"Resolved module names for {containing_file}: {rewritten}")
        return default_fn(rewritten, containing_file, *args, **kwargs)

    return resolve_module_names


def wrap_get_compilation_settings(default_fn, logger=None):
    """
    Wrap the host's compilation settings so Deno's compiler defaults apply underneath them
    """

    def get_compilation_settings():
        settings = deep_merge(CompilerDefaults.OPTIONS, default_fn())
        if logger:
            logger.debug(f"compilationSettings: {settings}")
        return settings

    return get_compilation_settings


def wrap_get_script_file_names(default_fn, dts_path_fn, logger=None):
    """
    Wrap the host's script file list to include the runtime declaration file

    Args:
        default_fn (callable): Host implementation returning a list of file names
        dts_path_fn (callable): Returns the declaration file path or None
    """

    def get_script_file_names():
        file_names = list(default_fn())
        dts_path = dts_path_fn()
        if dts_path and dts_path not in file_names:
            file_names.append(dts_path)
        if logger:
            logger.info(f"dts path: {dts_path}")
        return file_names

    return get_script_file_names


def wrap_get_completion_entry_details(default_fn):
    """
    Wrap completion details so suggested relative imports carry the '.ts' extension

    Details follow the host protocol shape: codeActions -> changes -> textChanges -> newText.
    Changes that create a new file are left alone
    """

    def get_completion_entry_details(*args, **kwargs):
        details = default_fn(*args, **kwargs)
        if not details:
            return details

        for code_action in details.get("codeActions") or []:
            for change in code_action.get("changes") or []:
                if change.get("isNewFile"):
                    continue
                for text_change in change.get("textChanges") or []:
                    text_change["newText"] = rewrite_import_text(text_change["newText"])
        return details

    return get_completion_entry_details


class DenoPlugin:
    """
    Installs Deno resolution onto a language service host

    The host is any object exposing some of resolve_module_names,
    get_compilation_settings, get_script_file_names and
    get_completion_entry_details; missing hooks are skipped

    Args:
        host (object): Language service host to augment
        project_directory (str|callable): Project directory or a callable returning it
        config (dict): Plugin configuration (supports 'dtsPath')
        deno_dir (str): Optional Deno directory override
        logger (Logger): Optional logger (defaults to one writing to stderr)
    """

    def __init__(self, host, project_directory, config=None, deno_dir=None, logger=None):
        self.host = host
        self.project_directory_fn = _as_callable(project_directory)
        self.config = config or {}
        self.logger = logger or Logger(stream=sys.stderr)
        self.context = ResolverContext(deno_dir=deno_dir, logger=self.logger)

    def runtime_dts_path(self):
        return find_runtime_dts(
            self.context.deno_dir,
            self.project_directory_fn(),
            bundled_dts_path=self.config.get("dtsPath"),
        )

    def install(self):
        """
        Replace the host's hooks with augmented versions

        Returns:
            The host object
        """
        self.logger.info("Create.")

        resolve_module_names = getattr(self.host, "resolve_module_names", None)
        if resolve_module_names is None:
            self.logger.info("resolve_module_names is undefined.")
            return self.host

        self.host.resolve_module_names = wrap_resolve_module_names(
            resolve_module_names, self.context, self.project_directory_fn
        )

        get_compilation_settings = getattr(self.host, "get_compilation_settings", None)
        if get_compilation_settings is not None:
            self.host.get_compilation_settings = wrap_get_compilation_settings(get_compilation_settings, self.logger)

        get_script_file_names = getattr(self.host, "get_script_file_names", None)
        if get_script_file_names is not None:
            self.host.get_script_file_names = wrap_get_script_file_names(
                get_script_file_names, self.runtime_dts_path, self.logger
            )

        get_completion_entry_details = getattr(self.host, "get_completion_entry_details", None)
        if get_completion_entry_details is not None:
            self.host.get_completion_entry_details = wrap_get_completion_entry_details(get_completion_entry_details)

        return self.host

    def on_configuration_changed(self, config=None):
        """
        Forward a configuration change to the resolver context
        """
        if config:
            self.config = deep_merge(self.config, config)
        self.context.on_configuration_changed(config)
