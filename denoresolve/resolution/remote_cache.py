"""
Mapping of remote specifiers onto the local dependency cache

Deno mirrors every fetched module under '<DENO_DIR>/deps/<scheme>/<host>/<path>'.
Remote specifiers are rewritten to that location so the host can read the
cached file instead of fetching anything
"""

import os
import sys

from denoresolve.common.defaults import ResolutionConfig
from denoresolve.resolution.redirects import RedirectResolver
from denoresolve.resolution.specifiers import is_remote


def get_deno_dir(environ=None, platform=None, home=None):
    """
    Locate the Deno directory

    '$DENO_DIR' wins when set; otherwise the platform cache directory is used

    Args:
        environ (dict): Environment mapping (defaults to os.environ)
        platform (str): sys.platform style identifier (defaults to the running platform)
        home (str): Home directory (defaults to the current user's)

    Returns:
        Absolute path of the Deno directory (it may not exist)
    """
    environ = os.environ if environ is None else environ
    platform = platform or sys.platform
    home = home or os.path.expanduser("~")

    deno_dir = environ.get(ResolutionConfig.DENO_DIR_ENV)
    if deno_dir:
        return os.path.abspath(deno_dir)

    if platform == "darwin":
        return os.path.join(home, "Library", "Caches", "deno")
    if platform.startswith("win"):
        local_app_data = environ.get("LOCALAPPDATA") or os.path.join(home, "AppData", "Local")
        return os.path.join(local_app_data, "deno")

    cache_home = environ.get("XDG_CACHE_HOME") or os.path.join(home, ".cache")
    return os.path.join(cache_home, "deno")


class RemoteCacheMapper:
    """
    Converts http(s) specifiers into paths inside the dependency cache

    Args:
        deno_dir (str): Root of the Deno directory
        logger (Logger): Optional logger
        max_redirects (int): Optional override of the redirect hop limit
    """

    def __init__(self, deno_dir, logger=None, max_redirects=None):
        self.deno_dir = deno_dir
        self.logger = logger
        self.redirects = RedirectResolver(self.to_cache_path, logger=logger, max_hops=max_redirects)

    @property
    def deps_dir(self):
        return os.path.join(self.deno_dir, ResolutionConfig.DEPS_DIRNAME)

    def to_cache_path(self, specifier):
        """
        Mirror a remote specifier under '<DENO_DIR>/deps' without following redirects

        Example:
            'https://deno.land/x/std/log/mod' -> '<DENO_DIR>/deps/https/deno.land/x/std/log/mod'
        """
        if not is_remote(specifier):
            return specifier
        return os.path.abspath(os.path.join(self.deps_dir, specifier.replace("://", "/", 1)))

    def map(self, specifier):
        """
        Map a remote specifier to the cache entry that should be loaded

        Non-remote specifiers pass through unchanged. The mapped path is run
        through redirect resolution before being returned

        Raises:
            RedirectLoopError: If the redirect chain does not terminate
            HeaderSidecarError: If a headers file is malformed
        """
        if not is_remote(specifier):
            return specifier

        redirected = self.redirects.resolve(self.to_cache_path(specifier))
        if self.logger:
            self.logger.info(f'convert "{specifier}" to "{redirected}".')
        return redirected
