"""
Module specifier resolution pipeline

Every specifier in a batch goes through, in order:
1. import map substitution (an alias may expand into a remote URL)
2. '.ts' / query normalization
3. remote-to-cache mapping, including redirect following

Each stage passes through specifiers it does not apply to
"""

from denoresolve.resolution.import_map import ImportMapStore
from denoresolve.resolution.project_config import build_import_map_transform, identity
from denoresolve.resolution.remote_cache import RemoteCacheMapper, get_deno_dir
from denoresolve.resolution.specifiers import strip_ext_name_dot_ts


def resolve_specifier(specifier, import_map_fn, mapper, logger=None):
    """
    Run one specifier through all pipeline stages
    """
    substituted = import_map_fn(specifier)
    normalized = strip_ext_name_dot_ts(substituted, logger)
    return mapper.map(normalized)


def resolve_batch(specifiers, import_map_fn, mapper, logger=None):
    """
    Resolve a batch of specifiers independently, preserving length and order

    Args:
        specifiers (sequence): Raw specifiers
        import_map_fn (callable): Import map substitution (identity when None)
        mapper (RemoteCacheMapper): Remote-to-cache mapper
        logger (Logger): Optional logger

    Returns:
        List of resolved specifiers/paths
    """
    import_map_fn = import_map_fn or identity
    return [resolve_specifier(s, import_map_fn, mapper, logger) for s in specifiers]


class ResolverContext:
    """
    Resolution state for a single project session

    Owns the import map cache, the current import map transform, and the
    cache mapper. The transform is rebuilt wholesale when the project
    directory changes or a configuration change is signalled

    Args:
        project_directory (str): Optional project directory to start with
        deno_dir (str): Deno directory (defaults to get_deno_dir())
        store (ImportMapStore): Optional shared import map store
        logger (Logger): Optional logger
    """

    def __init__(self, project_directory=None, deno_dir=None, store=None, logger=None):
        self.logger = logger
        self.store = store if store is not None else ImportMapStore(logger=logger)
        self.deno_dir = deno_dir or get_deno_dir()
        self.mapper = RemoteCacheMapper(self.deno_dir, logger=logger)
        self.project_directory = None
        self.transform = identity
        if project_directory is not None:
            self.set_project_directory(project_directory)

    def rebuild(self):
        """
        Rebuild the import map transform for the current project directory
        """
        if self.project_directory is None:
            self.transform = identity
        else:
            self.transform = build_import_map_transform(self.project_directory, self.store, self.logger)
        return self.transform

    def set_project_directory(self, directory):
        """
        Switch to a project directory, rebuilding the transform if it changed
        """
        if directory != self.project_directory:
            self.project_directory = directory
            self.rebuild()
        return self.transform

    def on_configuration_changed(self, config=None):
        """
        Handle an external configuration change signal
        """
        if self.project_directory is not None:
            self.rebuild()
        if self.logger:
            self.logger.info(f"onConfigurationChanged: {config}")

    def resolve_specifier(self, specifier):
        return resolve_specifier(specifier, self.transform, self.mapper, self.logger)

    def resolve_batch(self, specifiers, import_map_fn=None):
        """
        Resolve a batch with this context's transform (or an explicit one)

        Raises:
            RedirectLoopError: If a redirect chain does not terminate
            HeaderSidecarError: If a headers file is malformed
        """
        return resolve_batch(specifiers, import_map_fn or self.transform, self.mapper, self.logger)
