# FILE PATH: ignore_helper.py
# LOCATION: Root directory of your project
# DESCRIPTION: Ignore pattern resolution and glob matching for files and folders

"""
Ignore rules for the extractor and the comment remover.

Every item is checked twice against each pattern: once by its bare name
(``*.log``, ``.DS_Store``) and once by its path relative to the common base
path (``src/test/*.spec.js``, ``build/**``). Patterns ending with ``/`` only
ever apply to directories.
"""

import re
import fnmatch
import logging
import argparse
from typing import List, Optional, Sequence, Union

# Default patterns to ignore (development artifacts and VCS)
DEFAULT_IGNORE_PATTERNS = [
    ".git/",
    "node_modules/",
    "__pycache__/",
    ".vscode/",
    ".idea/",
    ".vs/",
    ".DS_Store",
    "Thumbs.db",
    "*.swp",
    "*.swo",
    "*.pyc",
    "*.pyo",
    "*.class",
    "yarn-error.log",
    "npm-debug.log",
    ".env",
]

DEFAULT_USER_PATTERNS = "*.log,*.tmp,dist/,build/"

SEPARATOR = "/"
GLOBSTAR = "**"


def parse_patterns(pattern_list: Union[str, Sequence[str], None]) -> List[str]:
    """
    Parse pattern list handling both space-separated and comma-separated values.
    Returns a cleaned list of patterns with whitespace stripped.
    """
    if not pattern_list:
        return []
    if isinstance(pattern_list, str):
        pattern_list = [pattern_list]

    processed = []
    for item in pattern_list:
        processed.extend(item.split(","))
    return [p.strip() for p in processed if p.strip()]


def get_effective_ignore_patterns(
    enable_ignore_processing: bool = True,
    ignore_patterns: Union[str, Sequence[str], None] = DEFAULT_USER_PATTERNS,
    use_default_patterns: bool = True,
) -> List[str]:
    """Combine the default patterns with the user patterns, or nothing at all when disabled."""
    if not enable_ignore_processing:
        return []

    user_patterns = parse_patterns(ignore_patterns)
    if use_default_patterns:
        return DEFAULT_IGNORE_PATTERNS + user_patterns
    return user_patterns


def normalize_path(item_path: str) -> str:
    """Convert backslashes to forward slashes for consistent matching."""
    return item_path.replace("\\", SEPARATOR)


def _match_segments(path_parts: List[str], pattern_parts: List[str]) -> bool:
    if not pattern_parts:
        return not path_parts

    head = pattern_parts[0]
    if head == GLOBSTAR:
        rest = pattern_parts[1:]
        return any(
            _match_segments(path_parts[i:], rest) for i in range(len(path_parts) + 1)
        )

    if not path_parts:
        return False
    # A wildcard never stands in for the empty segment after a trailing slash
    if path_parts[0] == "" and head != "":
        return False
    if not fnmatch.fnmatchcase(path_parts[0], head):
        return False
    return _match_segments(path_parts[1:], pattern_parts[1:])


def glob_match(path: str, pattern: str) -> bool:
    """
    Shell-glob match of a normalized path against a normalized pattern.

    ``*``, ``?`` and ``[...]`` stay within one path segment, ``**`` spans any
    number of segments. Leading dots get no special treatment, so ``*.log``
    matches ``.env.log``.
    """
    return _match_segments(path.split(SEPARATOR), pattern.split(SEPARATOR))


def check_is_ignored(
    item_relative_path: str,
    item_name: str,
    is_directory: bool,
    ignore_patterns: Optional[Sequence[str]],
) -> bool:
    """
    Checks if a file or directory should be ignored based on patterns.

    Args:
        item_relative_path: path relative to the common base path
        item_name: basename of the file or folder
        is_directory: whether the item is a directory
        ignore_patterns: glob patterns to check against

    Returns:
        True if any pattern matches the name or the relative path.
    """
    if not ignore_patterns:
        return False

    normalized_path = normalize_path(item_relative_path)
    normalized_name = normalize_path(item_name)

    # For directories, add trailing slash so "build/" matches "build"
    if is_directory and not normalized_path.endswith(SEPARATOR):
        path_for_check = f"{normalized_path}{SEPARATOR}"
    else:
        path_for_check = normalized_path

    for pattern in ignore_patterns:
        normalized_pattern = normalize_path(pattern)
        is_dir_pattern = normalized_pattern.endswith(SEPARATOR)

        # Directory-only patterns never match files
        if is_dir_pattern and not is_directory:
            continue

        try:
            if glob_match(normalized_name, normalized_pattern):
                return True
            # "node_modules/" also catches nested node_modules directories
            if is_dir_pattern and glob_match(
                f"{normalized_name}{SEPARATOR}", normalized_pattern
            ):
                return True
            if glob_match(path_for_check, normalized_pattern):
                return True
        except (re.error, ValueError) as e:
            logging.warning(f"Invalid ignore pattern '{pattern}': {str(e)}")
            continue

    return False


def add_ignore_arguments(parser: argparse.ArgumentParser):
    """Ignore flags shared by both command line tools."""
    parser.add_argument(
        "--ignore-patterns",
        nargs="+",
        default=[DEFAULT_USER_PATTERNS],
        help="Glob patterns for files and folders to ignore "
        "(e.g. '*.md,node_modules/,build/**'). "
        "Accepts space-separated or comma-separated values. "
        f"Default: {DEFAULT_USER_PATTERNS}",
    )
    parser.add_argument(
        "--no-default-ignores",
        action="store_true",
        default=False,
        help="Do not add the default ignore patterns (.git/, node_modules/, ...)",
    )
    parser.add_argument(
        "--disable-ignore",
        action="store_true",
        default=False,
        help="Disable all ignore processing, default and custom patterns alike",
    )


def ignore_patterns_from_args(args: argparse.Namespace) -> List[str]:
    return get_effective_ignore_patterns(
        enable_ignore_processing=not args.disable_ignore,
        ignore_patterns=args.ignore_patterns,
        use_default_patterns=not args.no_default_ignores,
    )
