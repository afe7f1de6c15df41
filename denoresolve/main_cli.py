"""
CLI entry point

Resolves module specifiers the way the Deno runtime would, either given
directly on the command line or extracted from a source file, and prints a
JSON object mapping each specifier to its resolved path
"""

import argparse
import json
import os
import sys

from denoresolve.common.defaults import apply_config_overrides
from denoresolve.common.file_helpers import FileOperationError
from denoresolve.common.utils import Logger
from denoresolve.resolution.errors import ResolutionError
from denoresolve.resolution.pipeline import ResolverContext


def build_parser():
    parser = argparse.ArgumentParser(
        prog="denoresolve",
        description="Resolve Deno-style module specifiers to local files and dependency-cache paths",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose debug logging")
    parser.add_argument("-c", "--config", help="JSON string with configuration overrides")
    parser.add_argument("-p", "--project", help="Project directory (defaults to the current directory)")
    parser.add_argument("--deno-dir", help="Deno directory (defaults to $DENO_DIR or the platform cache)")

    # Also accepted after the subcommand; SUPPRESS keeps a value given before it
    location = argparse.ArgumentParser(add_help=False)
    location.add_argument("-p", "--project", default=argparse.SUPPRESS, help="Project directory")
    location.add_argument("--deno-dir", default=argparse.SUPPRESS, help="Deno directory")

    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", parents=[location], help="Resolve the given specifiers")
    resolve_parser.add_argument("specifiers", nargs="+", help="Module specifiers to resolve")

    scan_parser = subparsers.add_parser(
        "scan", parents=[location], help="Resolve every specifier imported by a source file"
    )
    scan_parser.add_argument("file", help="JavaScript/TypeScript source file")

    return parser


def run(args, logger):
    """
    Execute a parsed command

    Returns:
        Dict mapping each specifier to its resolved path
    """
    project_directory = args.project
    if project_directory is None:
        project_directory = os.path.dirname(os.path.abspath(args.file)) if args.command == "scan" else os.getcwd()

    context = ResolverContext(project_directory=project_directory, deno_dir=args.deno_dir, logger=logger)

    if args.command == "scan":
        # Lazy import - tree-sitter is only needed for scanning
        from denoresolve.treewalk.javascript import extract_specifiers_from_file

        specifiers = extract_specifiers_from_file(args.file, logger)
    else:
        specifiers = args.specifiers

    resolved = context.resolve_batch(specifiers)
    return dict(zip(specifiers, resolved))


def main(argv=None):
    """
    Main entry point for the denoresolve CLI

    Exits with status 1 on malformed configuration, import maps or headers,
    redirect loops, and file access failures
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    # Diagnostics go to stderr so stdout stays valid JSON
    logger = Logger(verbose=args.verbose, stream=sys.stderr)

    if args.config:
        try:
            overrides = json.loads(args.config)
            if not isinstance(overrides, dict):
                raise ValueError("expected a JSON object")
            apply_config_overrides(overrides, logger)
        except ValueError as e:
            logger.error(f"Error parsing configuration overrides: {e}")
            logger.error(
                "Configuration must be a valid JSON string, e.g., '{\"MAX_REDIRECT_HOPS\": 5}' . "
                "See denoresolve/common/defaults.py for overrideable parameter names"
            )
            sys.exit(1)

    try:
        result = run(args, logger)
    except ResolutionError as e:
        logger.error(str(e))
        sys.exit(1)
    except (FileOperationError, OSError) as e:
        logger.error(f"File access failed: {e}")
        sys.exit(1)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
