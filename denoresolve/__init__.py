"""
Deno-style module specifier resolution for TypeScript language tooling
"""

__version__ = "0.1.0"
