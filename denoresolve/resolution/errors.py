"""
Error definitions for module specifier resolution
"""


class ResolutionError(Exception):
    """
    Base exception for resolution failures that abort a batch request

    Silent misses (no config, no import map, uncached module) are not errors
    and never raise
    """

    pass


class ImportMapNotFoundError(ResolutionError):
    """Raised when an import map file does not exist"""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Import map not found: {path}")


class ImportMapParseError(ResolutionError):
    """Raised when an import map is not valid JSON or lacks an 'imports' object"""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid import map {path}: {reason}")


class ProjectConfigError(ResolutionError):
    """Raised when a project configuration file exists but cannot be parsed"""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid project configuration {path}: {reason}")


class HeaderSidecarError(ResolutionError):
    """Raised when a cached module's headers file cannot be parsed"""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid headers file {path}: {reason}")


class RedirectLoopError(ResolutionError):
    """
    Raised when a redirect chain revisits a cache entry or exceeds the hop limit

    Attributes:
        chain: Cache paths visited, in order
    """

    def __init__(self, chain, limit=None):
        self.chain = list(chain)
        self.limit = limit
        if limit is not None:
            detail = f"exceeded {limit} redirects"
        else:
            detail = "redirect cycle detected"
        super().__init__(f"{detail}: {' -> '.join(self.chain)}")
