"""
Default parameter values used by the resolution pipeline and host integration
"""


class ResolutionConfig:
    """
    Parameters for module specifier resolution

    These control where project configuration is looked up, how the
    dependency cache is laid out, and how far redirect chains are followed
    """

    # Project configuration discovery (first match wins in each directory)
    PROJECT_CONFIG_FILENAMES = ("tsconfig.json",)

    # Dependency cache layout
    DENO_DIR_ENV = "DENO_DIR"
    DEPS_DIRNAME = "deps"
    HEADERS_SUFFIX = ".headers.json"
    RUNTIME_DTS_FILENAME = "lib.deno_runtime.d.ts"

    # Redirect chains longer than this raise RedirectLoopError
    MAX_REDIRECT_HOPS = 20


class CompilerDefaults:
    """
    Compiler options the Deno runtime applies to every program

    Mirrors the runtime's own defaults; project settings are merged on top
    """

    OPTIONS = {
        "allowJs": True,
        "checkJs": True,
        "esModuleInterop": True,
        "module": "ESNext",
        "moduleResolution": "NodeJs",
        "noEmit": True,
        "outDir": "$deno$",
        "removeComments": True,
        "resolveJsonModule": True,
        "sourceMap": True,
        "target": "ESNext",
        "typeRoots": [],
    }


class ResourceLimits:
    """
    Limits applied when scanning source files for specifiers
    """

    MAX_FILE_SIZE = 10 * 1024 * 1024  # Bytes; larger files are not parsed
    MAX_TREE_DEPTH = 50000  # Maximum syntax tree depth visited


CONFIG_CLASSES = {
    "ResolutionConfig": ResolutionConfig,
    "CompilerDefaults": CompilerDefaults,
    "ResourceLimits": ResourceLimits,
}


def _cast_like(old_value, value):
    """
    Cast an override to the type of the value it replaces

    Tuples accept any iterable (a JSON list, or a single string for one item)
    """
    if isinstance(old_value, tuple):
        if isinstance(value, str):
            return (value,)
        return tuple(value)
    return type(old_value)(value)


def apply_config_overrides(overrides, logger=None):
    """
    Apply configuration overrides from an external source

    Searches through all configuration classes to find matching parameters
    and applies type-safe value overrides with validation

    Args:
        overrides (dict): Dictionary mapping parameter names to override values
        logger (Logger): Optional logger for reporting applied overrides

    Example:
        apply_config_overrides({
            'MAX_REDIRECT_HOPS': 5,
            'PROJECT_CONFIG_FILENAMES': ['deno.json', 'tsconfig.json']
        })
    """
    if not overrides:
        return

    for key, value in overrides.items():
        applied = False
        for class_name, config_class in CONFIG_CLASSES.items():
            if hasattr(config_class, key):
                try:
                    old_value = getattr(config_class, key)
                    setattr(config_class, key, _cast_like(old_value, value))

                    if logger:
                        logger.debug(f"Config override: {class_name}.{key} = {value} (was {old_value})")
                    applied = True
                    break
                except (ValueError, TypeError) as e:
                    if logger:
                        logger.warning(f"Could not apply override for {key}={value}: {e}")
                    applied = True  # Mark as applied to avoid 'Unknown parameter' warning
                    break

        if not applied and logger:
            logger.warning(f"Config override ignored: Unknown parameter {key}")


class ConfigOverride:
    """
    Context manager to temporarily override configuration values

    Ensures overrides are reverted when the context exits, preventing test bleed-through

    Args:
        overrides (dict): Mapping of attribute name to new value
        logger (Logger): Optional logger for debug messages
    """

    def __init__(self, overrides=None, logger=None):
        self.overrides = overrides or {}
        self.logger = logger
        self._originals = []  # list of (cls, key, old_value)

    def __enter__(self):
        for key, value in self.overrides.items():
            applied = False
            for class_name, cls in CONFIG_CLASSES.items():
                if hasattr(cls, key):
                    old_value = getattr(cls, key)
                    try:
                        casted = _cast_like(old_value, value)
                    except (ValueError, TypeError):
                        casted = value
                    self._originals.append((cls, key, old_value))
                    setattr(cls, key, casted)
                    if self.logger:
                        self.logger.debug(f"ConfigOverride: {class_name}.{key} = {casted} (was {old_value})")
                    applied = True
                    break
            if not applied and self.logger:
                self.logger.warning(f"ConfigOverride ignored unknown parameter: {key}")
        return self

    def __exit__(self, exc_type, exc, tb):
        # Restore in reverse order
        for cls, key, old_value in reversed(self._originals):
            setattr(cls, key, old_value)
            if self.logger:
                self.logger.debug(f"ConfigOverride: restored {cls.__name__}.{key} -> {old_value}")
        self._originals.clear()
        return False
