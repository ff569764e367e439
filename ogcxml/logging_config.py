"""
Logging configuration for ogcxml

Includes IndentLogger for tree-style tracing of nested element parses.
"""

import io
import logging
import sys
from contextlib import contextmanager


class GlobalIndent:
    """Global indentation state for nested parse tracing"""

    _level = 0
    _tree_chars = {
        "pipe": "│",
        "branch": "├──",
        "leaf": "└──",
    }
    _active_branches: set[int] = set()

    @classmethod
    def increase(cls) -> None:
        """Increase indentation level"""
        cls._level += 1
        cls._active_branches.add(cls._level - 1)

    @classmethod
    def decrease(cls) -> None:
        """Decrease indentation level"""
        if cls._level > 0:
            cls._active_branches.discard(cls._level - 1)
            cls._level -= 1

    @classmethod
    def reset(cls) -> None:
        """Reset indentation state (useful for tests)"""
        cls._level = 0
        cls._active_branches = set()

    @classmethod
    def get_indent(cls) -> str:
        """Get current indentation string with tree characters"""
        if cls._level == 0:
            return ""

        parts = []
        for i in range(cls._level - 1):
            if i in cls._active_branches:
                parts.append(f"{cls._tree_chars['pipe']}   ")
            else:
                parts.append("    ")

        is_end = (cls._level - 1) not in cls._active_branches
        parts.append(cls._tree_chars["leaf"] if is_end else cls._tree_chars["branch"])
        return "".join(parts)


class IndentLogger:
    """Logger wrapper that prefixes messages with the current parse depth"""

    def __init__(self, base_logger: logging.Logger) -> None:
        self._logger = base_logger

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(f"{self.indent}{msg}", *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(f"{self.indent}{msg}", *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(f"{self.indent}{msg}", *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(f"{self.indent}{msg}", *args, **kwargs)

    @property
    def indent(self) -> str:
        """Get current indentation string"""
        return GlobalIndent.get_indent()

    @contextmanager
    def indent_block(self, initial_message: str | None = None):
        """
        Context manager for one nested level of tracing

        Args:
            initial_message: Optional debug message logged at block start
        """
        if initial_message:
            self.debug(initial_message)
        GlobalIndent.increase()
        try:
            yield
        finally:
            GlobalIndent.decrease()


def setup_logging(level=logging.INFO):
    """
    Configure logging for ogcxml

    Args:
        level: Logging level (default: INFO)

    Returns:
        IndentLogger: Configured logger with indentation support
    """
    base_logger = logging.getLogger("ogcxml")
    base_logger.setLevel(level)
    base_logger.handlers = []

    # UTF-8 console stream so tree characters survive narrow code pages
    stream = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8", errors="replace")
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)8s %(message)s"))
    base_logger.addHandler(handler)

    return IndentLogger(base_logger)


logger = IndentLogger(logging.getLogger("ogcxml"))
