"""
Tree-sitter based specifier extraction
"""

from denoresolve.treewalk.javascript import SpecifierVisitor, extract_specifiers, extract_specifiers_from_file

__all__ = ["SpecifierVisitor", "extract_specifiers", "extract_specifiers_from_file"]
