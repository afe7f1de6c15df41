"""
Compatibility wrapper around tree-sitter parser factories

Provides get_parser, get_language, parse_source and the USING_TSL_PACK flag
"""

try:
    from tree_sitter_language_pack import get_language, get_parser

    USING_TSL_PACK = True
except ImportError:
    try:
        from tree_sitter_languages import get_language, get_parser

        USING_TSL_PACK = False
    except ImportError as exc:
        raise ImportError(
            "Unable to import tree-sitter parser backends. Install tree-sitter-language-pack "
            "or tree_sitter_languages to enable specifier extraction."
        ) from exc

# File extensions mapped to the grammar used to parse them
LANGUAGE_BY_EXTENSION = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}


def language_for_path(file_path):
    """
    Pick the tree-sitter grammar for a source file, defaulting to TypeScript
    """
    for ext, language in LANGUAGE_BY_EXTENSION.items():
        if file_path.endswith(ext):
            return language
    return "typescript"


def parse_source(code, language):
    """
    Parse source text and return the root node

    Args:
        code (str): Source text
        language (str): Grammar name (e.g. 'typescript', 'tsx', 'javascript')
    """
    parser = get_parser(language)
    return parser.parse(code.encode("utf-8")).root_node


__all__ = ["get_parser", "get_language", "parse_source", "language_for_path", "USING_TSL_PACK"]
