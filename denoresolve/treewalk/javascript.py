"""
JavaScript/TypeScript specifier extraction
"""

import os

from denoresolve.common.defaults import ResourceLimits
from denoresolve.common.file_helpers import FileOperationError, read_file_content
from denoresolve.common.tsl import language_for_path, parse_source
from denoresolve.treewalk.base import TreeVisitor


def _string_value(node):
    """
    Return the unquoted value of a string literal node
    """
    return node.text.decode("utf-8").strip("'\"")


class SpecifierVisitor(TreeVisitor):
    """
    Visitor collecting module specifiers from a JavaScript/TypeScript tree

    Covers static imports, re-exports, dynamic import() and require() calls.
    Specifiers are kept in first-seen order without duplicates
    """

    def __init__(self, logger=None):
        super().__init__(logger)
        self.specifiers = []

    def _record(self, specifier):
        if specifier and specifier not in self.specifiers:
            self.specifiers.append(specifier)

    def _source_string(self, node):
        """
        Return the module source string of an import/export statement, if present
        """
        source = node.child_by_field_name("source")
        if source is not None and source.type == "string":
            return _string_value(source)
        for child in node.children:
            if child.type == "string":
                return _string_value(child)
            if child.type == "import_require_clause":
                # TypeScript: import x = require('...')
                return self._source_string(child)
        return None

    def _call_argument_string(self, call_node):
        """
        Return the first argument of a call if it is a plain string literal
        """
        args = call_node.child_by_field_name("arguments")
        if args and args.named_child_count > 0:
            candidate = args.named_child(0)
            if candidate is not None and candidate.type == "string":
                return _string_value(candidate)
        return None

    def visit_import_statement(self, node):
        self._record(self._source_string(node))

    def visit_export_statement(self, node):
        # Only re-exports ('export ... from') carry a source
        source = node.child_by_field_name("source")
        if source is not None and source.type == "string":
            self._record(_string_value(source))
        self.generic_visit(node)

    def visit_call_expression(self, node):
        func = node.child_by_field_name("function")
        is_require = func is not None and func.type == "identifier" and func.text.decode("utf-8") == "require"
        is_dynamic_import = func is not None and func.type == "import"
        if is_require or is_dynamic_import:
            self._record(self._call_argument_string(node))

        # Calls nest (e.g. inside callbacks), keep descending
        self.generic_visit(node)


def extract_specifiers(code, language="typescript", logger=None):
    """
    Extract import specifiers from source text

    Args:
        code (str): Source text
        language (str): tree-sitter grammar name
        logger (Logger): Optional logger

    Returns:
        List of specifiers in first-seen order
    """
    visitor = SpecifierVisitor(logger)
    visitor.visit(parse_source(code, language))
    return visitor.specifiers


def extract_specifiers_from_file(file_path, logger=None):
    """
    Extract import specifiers from a source file, picking the grammar from its extension

    Raises:
        FileOperationError: If the file cannot be read or exceeds ResourceLimits.MAX_FILE_SIZE
    """
    size = os.path.getsize(file_path)
    if size > ResourceLimits.MAX_FILE_SIZE:
        raise FileOperationError(
            f"{file_path} is {size} bytes, larger than the {ResourceLimits.MAX_FILE_SIZE} byte limit"
        )
    code = read_file_content(file_path)
    return extract_specifiers(code, language_for_path(file_path), logger)
