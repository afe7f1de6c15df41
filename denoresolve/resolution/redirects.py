"""
Redirect following for cached remote modules

When a remote module was fetched through an HTTP redirect, Deno stores the
response headers next to the requested cache entry ('<module>.ts.headers.json')
and the module body under the redirect target. Resolution follows these
sidecars until an existing module is found or the chain runs out
"""

import json
import os
from dataclasses import dataclass
from typing import Optional

from denoresolve.common.defaults import ResolutionConfig
from denoresolve.common.file_helpers import FileDecodeError, safe_json_load
from denoresolve.resolution.errors import HeaderSidecarError, RedirectLoopError
from denoresolve.resolution.specifiers import TS_EXTENSION, is_remote, strip_ext_name_dot_ts


@dataclass
class HeaderSidecar:
    """
    Headers recorded for a cached module

    Attributes:
        mime_type: Content type reported by the server, if recorded
        redirect_to: Remote specifier the request was redirected to, if any
    """

    mime_type: Optional[str] = None
    redirect_to: Optional[str] = None


def read_header_sidecar(path):
    """
    Read a '.headers.json' sidecar

    Args:
        path (str): Path to the sidecar file

    Returns:
        HeaderSidecar instance; fields that are missing or not strings are None

    Raises:
        HeaderSidecarError: If the file is not valid UTF-8 JSON or not an object
    """
    try:
        data = safe_json_load(path)
    except (json.JSONDecodeError, FileDecodeError) as e:
        raise HeaderSidecarError(path, str(e))
    if not isinstance(data, dict):
        raise HeaderSidecarError(path, "top-level value must be an object")

    mime_type = data.get("mime_type")
    redirect_to = data.get("redirect_to")
    return HeaderSidecar(
        mime_type=mime_type if isinstance(mime_type, str) else None,
        redirect_to=redirect_to if isinstance(redirect_to, str) and redirect_to else None,
    )


def module_file_for(cache_path):
    """
    Path of the module body for a cache entry ('.ts' appended unless present)
    """
    return cache_path if cache_path.endswith(TS_EXTENSION) else f"{cache_path}{TS_EXTENSION}"


class RedirectResolver:
    """
    Follows header-sidecar redirects inside the dependency cache

    Args:
        to_cache_path (callable): Maps a remote specifier to its cache path (no redirect following)
        logger (Logger): Optional logger
        max_hops (int): Maximum redirects to follow (defaults to ResolutionConfig.MAX_REDIRECT_HOPS)
    """

    def __init__(self, to_cache_path, logger=None, max_hops=None):
        self.to_cache_path = to_cache_path
        self.logger = logger
        self.max_hops = max_hops

    def resolve(self, cache_path):
        """
        Resolve a cache path to the entry whose module body exists

        Returns the input unchanged when the module is present, or when neither
        the module nor a headers sidecar exists (the host then reports the miss)

        Args:
            cache_path (str): Extensionless cache path of a remote module

        Returns:
            Cache path of the module that should be loaded

        Raises:
            RedirectLoopError: If the chain revisits an entry or exceeds the hop limit
            HeaderSidecarError: If a sidecar is malformed
        """
        max_hops = self.max_hops if self.max_hops is not None else ResolutionConfig.MAX_REDIRECT_HOPS
        chain = [cache_path]
        current = cache_path

        while True:
            candidate = module_file_for(current)
            if os.path.exists(candidate):
                return current

            headers_path = f"{candidate}{ResolutionConfig.HEADERS_SUFFIX}"
            if not os.path.exists(headers_path):
                return current

            headers = read_header_sidecar(headers_path)
            if headers.redirect_to is None:
                if self.logger:
                    self.logger.debug(f"No redirect_to in {headers_path}")
                return current

            if len(chain) > max_hops:
                raise RedirectLoopError(chain, limit=max_hops)

            if self.logger:
                self.logger.info(f'redirect "{current}" to "{headers.redirect_to}".')

            redirect_to = strip_ext_name_dot_ts(headers.redirect_to, self.logger)
            if not is_remote(redirect_to):
                # Only remote targets live in the cache
                return redirect_to

            target = self.to_cache_path(redirect_to)
            if target in chain:
                raise RedirectLoopError(chain + [target])
            chain.append(target)
            current = target
