"""
Resolution pipeline exports
"""

from denoresolve.resolution.errors import (
    HeaderSidecarError,
    ImportMapNotFoundError,
    ImportMapParseError,
    ProjectConfigError,
    RedirectLoopError,
    ResolutionError,
)
from denoresolve.resolution.import_map import ImportMap, ImportMapStore
from denoresolve.resolution.pipeline import ResolverContext, resolve_batch
from denoresolve.resolution.project_config import (
    ProjectConfig,
    build_import_map_transform,
    find_project_config,
    load_project_config,
)
from denoresolve.resolution.redirects import HeaderSidecar, RedirectResolver, read_header_sidecar
from denoresolve.resolution.remote_cache import RemoteCacheMapper, get_deno_dir
from denoresolve.resolution.specifiers import is_remote, split_query, strip_ext_name_dot_ts

__all__ = [
    "ResolutionError",
    "ImportMapNotFoundError",
    "ImportMapParseError",
    "ProjectConfigError",
    "HeaderSidecarError",
    "RedirectLoopError",
    "ImportMap",
    "ImportMapStore",
    "ProjectConfig",
    "find_project_config",
    "load_project_config",
    "build_import_map_transform",
    "HeaderSidecar",
    "RedirectResolver",
    "read_header_sidecar",
    "RemoteCacheMapper",
    "get_deno_dir",
    "is_remote",
    "split_query",
    "strip_ext_name_dot_ts",
    "ResolverContext",
    "resolve_batch",
]
