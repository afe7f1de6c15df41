"""
Specifier normalization

Deno loads modules by their full '.ts' name while the host's resolver tries
extensions itself, so specifiers are reduced to the extensionless form. A
query string after a '.ts' segment is dropped along with everything after it
"""

REMOTE_SCHEMES = ("http://", "https://")
TS_EXTENSION = ".ts"


def is_remote(specifier):
    """
    True if the specifier is an absolute http(s) URL
    """
    return specifier.startswith(REMOTE_SCHEMES)


def split_query(specifier):
    """
    Return the part of a specifier before the first '?' that follows a '.ts' segment

    Each '?' is tried left to right; markers not preceded by '.ts' are skipped.

    Args:
        specifier (str): Raw module specifier

    Returns:
        The query-less specifier (still ending in '.ts'), or None if no such marker exists

    Example:
        split_query('mod.ts?x=1') -> 'mod.ts'
        split_query('a?b.ts?c') -> 'a?b.ts'
        split_query('mod.js?x=1') -> None
    """
    index = specifier.find("?")
    while index != -1:
        if specifier[:index].endswith(TS_EXTENSION):
            return specifier[:index]
        index = specifier.find("?", index + 1)
    return None


def strip_ext_name_dot_ts(specifier, logger=None):
    """
    Normalize a specifier by removing a trailing '.ts' or a '.ts?query' suffix

    When a query follows a '.ts' segment the query-less form is returned as is;
    otherwise exactly one trailing '.ts' is removed. Anything else passes through

    Args:
        specifier (str): Module specifier
        logger (Logger): Optional logger for debug output

    Returns:
        Normalized specifier
    """
    without_query = split_query(specifier)
    if without_query is not None:
        return without_query

    if not specifier.endswith(TS_EXTENSION):
        return specifier

    name = specifier[: -len(TS_EXTENSION)]
    if logger:
        logger.debug(f'strip "{specifier}" to "{name}".')
    return name
