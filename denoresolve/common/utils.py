"""
Logging utilities shared by the resolution pipeline and host integration
"""

import json
import sys
import traceback

PLUGIN_ID = "typescript-deno-plugin"


class Logger:
    """
    Simple logger class with deduplication to avoid repetitive messages

    Messages are tagged with the plugin id so they can be told apart from the
    host's own output. The deduplication set is cleared once it holds
    MAX_SEEN_MESSAGES entries
    """

    MAX_SEEN_MESSAGES = 10000

    def __init__(self, verbose=False, name=None, stream=None):
        """
        Args:
            verbose (bool): Enable verbose output
            name (str): Optional logger name, used as the message tag
            stream (object): Optional text stream for info/debug output (defaults to stdout)
        """
        self.verbose = verbose
        self.name = name or PLUGIN_ID
        self.stream = stream
        self.seen_messages = set()  # Track already seen messages to avoid duplication
        self.log_level = 1 if not verbose else 0  # 0=debug, 1=info, 2=warning, 3=error

    def _format(self, message):
        if not isinstance(message, str):
            message = json.dumps(message, default=str)
        return f"[{self.name}] {message}"

    def _emit(self, text, error=False):
        if error:
            print(text, file=sys.stderr)
        else:
            print(text, file=self.stream or sys.stdout)

    def _remember(self, text):
        if len(self.seen_messages) >= self.MAX_SEEN_MESSAGES:
            self.seen_messages.clear()
        self.seen_messages.add(text)

    def debug(self, message):
        """
        Log a debug message (only in verbose mode)

        Args:
            message (str): Debug message to log
        """
        if self.log_level <= 0:
            text = self._format(message)
            if text not in self.seen_messages:
                self._emit(f"... Debug: {text}")
                self._remember(text)

    def info(self, message):
        """
        Log an informational message, avoiding duplicates

        Args:
            message (str): Message to log; non-string values are JSON encoded
        """
        if self.log_level <= 1:
            text = self._format(message)
            if text not in self.seen_messages:
                self._emit(text)
                self._remember(text)

    def warning(self, message):
        """
        Log a warning message, always showing warnings

        Args:
            message (str): Warning message to log
        """
        if self.log_level <= 2:
            self._emit(f"Warning: {self._format(message)}", error=True)

    def error(self, message, exception=None):
        """
        Log an error message with optional exception details

        Args:
            message (str): Error message to log
            exception (Exception): Optional exception to include traceback for (if verbose)
        """
        if self.log_level <= 3:
            self._emit(f"Error: {self._format(message)}", error=True)
            if exception and self.verbose:
                traceback.print_exc()


# Module-level logger instance
_module_logger = None


def get_logger(name=None, verbose=False):
    """
    Get a logger instance

    Args:
        name (str): Optional name for the logger
        verbose (bool): Whether to enable verbose logging

    Returns:
        Logger instance
    """
    global _module_logger
    if _module_logger is None or name:
        _module_logger = Logger(verbose=verbose, name=name)
    return _module_logger
