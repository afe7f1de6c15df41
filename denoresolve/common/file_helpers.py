"""
Shared file operation utilities
"""

import json
import os
import re

# Matches string literals (kept) and line/block comments (removed)
_COMMENT_REGEX = r"'(\\'|[^'])*?'|\"(\\\"|[^\"])*?\"|//[^\r\n]*|/\*(?:(?!\*/).)*\*/"
_TRAILING_COMMA_REGEX = r",\s*([\]}])"


class FileOperationError(Exception):
    """Raised when a file operation fails"""

    pass


class FileDecodeError(FileOperationError):
    """Raised when file content is not valid text in the requested encoding"""

    pass


def read_file_content(file_path, encoding="utf-8"):
    """
    Read file content as text

    Args:
        file_path (str): Path to the file to read
        encoding (str): File encoding (default: 'utf-8')

    Returns:
        The content of the file as a string

    Raises:
        FileOperationError: If the file cannot be read
        FileDecodeError: If the content is not valid in the given encoding
    """
    try:
        with open(file_path, "r", encoding=encoding) as f:
            return f.read()
    except FileNotFoundError:
        raise
    except UnicodeDecodeError as e:
        raise FileDecodeError(f"Failed to decode file {file_path}: {e}")
    except OSError as e:
        raise FileOperationError(f"Failed to read file {file_path}: {e}")


def safe_json_load(file_path):
    """
    Load JSON content from a file

    Args:
        file_path (str): Path to the JSON file to read

    Returns:
        The parsed JSON content as a dictionary or list

    Raises:
        FileNotFoundError: If the file does not exist
        FileOperationError: If the file cannot be read
        FileDecodeError: If the file is not valid UTF-8
        json.JSONDecodeError: If JSON parsing fails
    """
    return json.loads(read_file_content(file_path, encoding="utf-8-sig"))


def strip_json_comments(content):
    """
    Remove comments and trailing commas from JSON-with-comments text

    String literals are preserved verbatim, so '//' inside a URL survives
    """
    content = re.sub(
        _COMMENT_REGEX,
        lambda match: match.group(0)
        if match.group(0).startswith('"') or match.group(0).startswith("'")
        else "",
        content,
        flags=re.S,
    )
    return re.sub(_TRAILING_COMMA_REGEX, r"\1", content)


def load_jsonc(file_path):
    """
    Load a tsconfig-style JSON document that may carry comments, trailing commas or a BOM

    An empty (or whitespace/comment only) file parses as an empty object

    Args:
        file_path (str): Path to the file to read

    Returns:
        The parsed content

    Raises:
        FileNotFoundError: If the file does not exist
        FileOperationError: If the file cannot be read
        FileDecodeError: If the file is not valid UTF-8
        json.JSONDecodeError: If the remaining content is not valid JSON
    """
    content = strip_json_comments(read_file_content(file_path, encoding="utf-8-sig"))
    if not content.strip():
        return {}
    return json.loads(content)


def file_mtime_ms(file_path):
    """
    Return the modification time of a file in milliseconds

    Raises:
        FileNotFoundError: If the file does not exist
    """
    return os.stat(file_path).st_mtime_ns // 1_000_000
