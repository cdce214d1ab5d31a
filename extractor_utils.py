# FILE PATH: extractor_utils.py
# LOCATION: Root directory of your project
# DESCRIPTION: Shared path, tree rendering, token counting and logging helpers

"""
Small helpers shared by the extractor and the comment remover:
common base path computation, relative paths, tree lines, the file-types
header, tiktoken based token counting and logging setup.
"""

import os
import logging
from typing import Iterable, List, Optional

import tiktoken

TOKEN_ENCODING = "cl100k_base"
BRANCH = "├── "
LAST_BRANCH = "└── "
INDENT = "  "


def setup_logging(log_file: str, enable_logging: bool = True):
    """Configure logging with specified settings."""
    if enable_logging:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s - %(levelname)s - %(message)s",
            filemode="w",
        )
    else:
        logging.basicConfig(level=logging.ERROR, handlers=[logging.NullHandler()])


def find_common_base_path(paths: List[str]) -> str:
    """
    Return the longest common segment prefix of ``paths``.

    Segments are compared by exact string equality. An empty list, or paths
    that share no segment, give an empty string.
    """
    if not paths:
        return ""

    split_paths = [p.split(os.sep) for p in paths]
    min_length = min(len(parts) for parts in split_paths)

    common_base_parts = []
    for i in range(min_length):
        current_part = split_paths[0][i]
        if all(parts[i] == current_part for parts in split_paths):
            common_base_parts.append(current_part)
        else:
            break

    return os.sep.join(common_base_parts)


def resolve_base_path(paths: List[str]) -> str:
    """
    Common base path of a selection, anchored on a directory.

    A single selected file is its own common prefix; its parent directory is
    used instead so the file keeps a non-empty relative path.
    """
    base_path = find_common_base_path(paths)
    if base_path and os.path.isfile(base_path):
        return os.path.dirname(base_path)
    return base_path


def relative_path(path: str, base_path: str) -> str:
    """Path of ``path`` relative to ``base_path`` (empty base means the filesystem root)."""
    anchor = base_path or os.sep
    try:
        rel_path = os.path.relpath(path, anchor)
    except ValueError:
        # Different drives on Windows
        return path
    return "" if rel_path == os.curdir else rel_path


def render_tree_line(depth: int, is_last: bool, name: str, is_directory: bool) -> str:
    """Render one line of the folder structure."""
    prefix = LAST_BRANCH if is_last else BRANCH
    suffix = "/" if is_directory else ""
    return f"{INDENT * depth}{prefix}{name}{suffix}\n"


def render_path_lines(rel_path: str) -> str:
    """
    Render a nested file path as a chain of tree lines.

    Ancestors are drawn as directories and only the final segment as a leaf,
    so a directly selected file keeps its ancestry even though its parent
    directories were never walked.
    """
    parts = [part for part in rel_path.split(os.sep) if part]
    lines = []
    for index, part in enumerate(parts):
        is_leaf = index == len(parts) - 1
        lines.append(render_tree_line(index, is_leaf, part, not is_leaf))
    return "".join(lines)


def create_header(file_types: Iterable[str]) -> str:
    return f"File types: {', '.join(sorted(set(file_types)))}"


def file_extension(file_path: str) -> str:
    """Lowercase extension without the leading dot ('' when there is none)."""
    return os.path.splitext(file_path)[1].lower()[1:]


def count_tokens(text: str, encoding: Optional[tiktoken.Encoding] = None) -> int:
    """Count tokens in text using tiktoken."""
    if encoding is None:
        encoding = tiktoken.get_encoding(TOKEN_ENCODING)
    return len(encoding.encode(text, disallowed_special=()))


class TokenCounter:
    """
    Scoped tiktoken encoder.

    The encoding is acquired on ``__enter__`` and dropped on ``__exit__``,
    whether the block finished normally or raised:

        with TokenCounter() as counter:
            counter.count("some text")
    """

    def __init__(self, encoding_name: str = TOKEN_ENCODING):
        self.encoding_name = encoding_name
        self._encoding = None

    @property
    def active(self) -> bool:
        return self._encoding is not None

    def __enter__(self) -> "TokenCounter":
        self._encoding = tiktoken.get_encoding(self.encoding_name)
        logging.debug(f"Acquired tokenizer: {self.encoding_name}")
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self._encoding = None
        logging.debug(f"Released tokenizer: {self.encoding_name}")
        return False

    def count(self, text: str) -> int:
        if self._encoding is None:
            raise RuntimeError("TokenCounter used outside of its 'with' block")
        return count_tokens(text, self._encoding)
