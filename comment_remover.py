# FILE PATH: comment_remover.py
# LOCATION: Root directory of your project
# DESCRIPTION: Strip comments from source files in place, reporting chars and tokens removed

"""
Regex based comment removal for a selection of files and folders.

Comments are recognised lexically from a per-extension table, so comment-like
text inside string literals is removed too. Files are only rewritten when
their content actually changes, which makes a second run a no-op.
"""

import os
import re
import sys
import logging
import argparse
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from tqdm import tqdm

from extractor_utils import TokenCounter, relative_path, resolve_base_path, setup_logging
from file_traversal import iter_selected_files
from ignore_helper import add_ignore_arguments, check_is_ignored, ignore_patterns_from_args

C_STYLE = {"single": "//", "multi": [("/*", "*/")]}

COMMENT_PATTERNS: Dict[str, Dict] = {
    ".js": C_STYLE,
    ".jsx": C_STYLE,
    ".ts": C_STYLE,
    ".tsx": C_STYLE,
    ".py": {"single": "#", "multi": [('"""', '"""'), ("'''", "'''")]},
    ".java": C_STYLE,
    ".c": C_STYLE,
    ".cpp": C_STYLE,
    ".h": C_STYLE,
    ".hpp": C_STYLE,
    ".cs": C_STYLE,
    ".go": C_STYLE,
    ".rb": {"single": "#", "multi": [("=begin", "=end")]},
    ".php": C_STYLE,
    ".swift": C_STYLE,
    ".rs": C_STYLE,
    ".kt": C_STYLE,
    ".kts": C_STYLE,
    ".scala": C_STYLE,
    ".html": {"multi": [("<!--", "-->")]},
    ".htm": {"multi": [("<!--", "-->")]},
    ".xml": {"multi": [("<!--", "-->")]},
    ".svg": {"multi": [("<!--", "-->")]},
    ".vue": {"single": "//", "multi": [("<!--", "-->"), ("/*", "*/")]},
    ".css": {"multi": [("/*", "*/")]},
    ".scss": C_STYLE,
    ".less": C_STYLE,
}

MARKUP_WITH_EMBEDDED_CODE = {".html", ".htm"}

SCRIPT_BLOCK = re.compile(r"(<script\b[^>]*>)([\s\S]*?)(</script>)", re.IGNORECASE)
STYLE_BLOCK = re.compile(r"(<style\b[^>]*>)([\s\S]*?)(</style>)", re.IGNORECASE)
JS_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
HTML_COMMENT = re.compile(r"<!--[\s\S]*?-->")

EMPTY_LINES = re.compile(r"^\s*[\r\n]", re.MULTILINE)
TRAILING_WHITESPACE = re.compile(r"\s+$", re.MULTILINE)
EXCESS_NEWLINES = re.compile(r"[\r\n]{3,}")
TRAILING_BLANKS = re.compile(r"[ \t]+$", re.MULTILINE)


@dataclass
class FileRemovalResult:
    processed: bool = False
    characters_removed: int = 0
    tokens_removed: int = 0


@dataclass
class CommentRemovalReport:
    files_processed: int = 0
    characters_removed: int = 0
    tokens_removed: int = 0
    error: Optional[str] = None

    def add(self, result: FileRemovalResult):
        if not result.processed:
            return
        self.files_processed += 1
        self.characters_removed += result.characters_removed
        self.tokens_removed += result.tokens_removed

    def message(self) -> str:
        if self.files_processed > 0:
            return (
                f"Removed {self.characters_removed} chars "
                f"({self.tokens_removed} tokens) from {self.files_processed} files"
            )
        return "No comments found to remove"


def is_supported_file_type(ext: str) -> bool:
    return ext in COMMENT_PATTERNS


def _single_line_regex(marker: str):
    return re.compile(f"{re.escape(marker)}.*$", re.MULTILINE)


def _multi_line_regex(start: str, end: str):
    return re.compile(f"{re.escape(start)}[\\s\\S]*?{re.escape(end)}")


def _strip_script(match) -> str:
    open_tag, content, close_tag = match.groups()
    cleaned = JS_LINE_COMMENT.sub("", content)
    cleaned = BLOCK_COMMENT.sub("", cleaned)
    return open_tag + cleaned + close_tag


def _strip_style(match) -> str:
    open_tag, content, close_tag = match.groups()
    return open_tag + BLOCK_COMMENT.sub("", content) + close_tag


def normalize_whitespace(content: str) -> str:
    """Drop empty lines and trailing whitespace, keep at most one blank line."""
    result = EMPTY_LINES.sub("", content)
    result = TRAILING_WHITESPACE.sub("", result)
    result = EXCESS_NEWLINES.sub("\n\n", result)
    return TRAILING_BLANKS.sub("", result)


def _strip_once(content: str, ext: str, patterns: Dict) -> str:
    if ext in MARKUP_WITH_EMBEDDED_CODE:
        result = SCRIPT_BLOCK.sub(_strip_script, content)
        result = STYLE_BLOCK.sub(_strip_style, result)
        return HTML_COMMENT.sub("", result)

    result = content
    if patterns.get("single"):
        result = _single_line_regex(patterns["single"]).sub("", result)
    for start, end in patterns.get("multi", []):
        result = _multi_line_regex(start, end).sub("", result)
    return result


def remove_comments_from_content(content: str, ext: str) -> str:
    """
    Remove comments from ``content`` according to the rules for ``ext``.

    Unsupported extensions are returned unchanged. HTML gets its script and
    style blocks cleaned before markup comments are removed, so a markup
    comment can never swallow a block boundary first.

    Passes repeat until the text stops changing: removing one span can join
    the text around it into a new comment (``/`` + ``/*a*/*b*/`` gives
    ``/*b*/``). Every pass only shortens the text, so the loop terminates.
    """
    patterns = COMMENT_PATTERNS.get(ext)
    if not patterns:
        return content

    result = content
    while True:
        cleaned = normalize_whitespace(_strip_once(result, ext, patterns))
        if cleaned == result:
            return cleaned
        result = cleaned


def process_file(
    file_path: str,
    counter: TokenCounter,
    base_path: str,
    ignore_patterns: Optional[Sequence[str]] = None,
) -> FileRemovalResult:
    """Strip comments from one file, rewriting it only when something changed."""
    ext = os.path.splitext(file_path)[1].lower()
    rel_path = relative_path(file_path, base_path)
    file_name = os.path.basename(file_path)

    if check_is_ignored(rel_path, file_name, False, ignore_patterns):
        logging.debug(f"Ignoring file: {rel_path}")
        return FileRemovalResult()

    if not is_supported_file_type(ext):
        logging.debug(f"File type {ext} not supported: {rel_path}")
        return FileRemovalResult()

    try:
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        logging.warning(f"Skipping {file_path}, not valid UTF-8: {str(e)}")
        return FileRemovalResult()
    except OSError as e:
        logging.error(f"Cannot read file {file_path}: {str(e)}")
        return FileRemovalResult()

    cleaned_content = remove_comments_from_content(content, ext)
    if cleaned_content == content:
        logging.debug(f"No changes needed for file: {rel_path}")
        return FileRemovalResult()

    original_tokens = counter.count(content)
    new_tokens = counter.count(cleaned_content)

    try:
        with open(file_path, "w", encoding="utf-8", newline="") as f:
            f.write(cleaned_content)
    except OSError as e:
        logging.error(f"Cannot write file {file_path}: {str(e)}")
        return FileRemovalResult()

    logging.info(f"Comments removed, file saved: {rel_path}")
    return FileRemovalResult(
        processed=True,
        characters_removed=len(content) - len(cleaned_content),
        tokens_removed=original_tokens - new_tokens,
    )


def remove_comments(
    selected_paths: Sequence[str],
    ignore_patterns: Optional[Sequence[str]] = None,
    show_progress: bool = False,
) -> CommentRemovalReport:
    """
    Remove comments from every supported file in the selection.

    Directories are walked with the same ignore rules as the extractor. One
    tokenizer is used for the whole run and released when it ends.
    """
    report = CommentRemovalReport()
    if not selected_paths:
        return report

    ignore_patterns = list(ignore_patterns or [])
    base_path = resolve_base_path(list(selected_paths))
    logging.info(f"Base path for ignore checks: {base_path}")
    logging.info(f"Using ignore patterns: {ignore_patterns}")

    try:
        with TokenCounter() as counter:
            files = iter_selected_files(selected_paths, base_path, ignore_patterns)
            for entry in tqdm(
                files, desc="Removing comments", unit="file", disable=not show_progress
            ):
                report.add(process_file(entry.path, counter, base_path, ignore_patterns))
    except Exception as e:
        logging.error(f"Error in remove_comments: {str(e)}")
        report.error = str(e)

    return report


def confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Remove comments from source files in place"
    )

    parser.add_argument("paths", nargs="+", help="Files and directories to clean")
    parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        default=False,
        help="Do not ask for confirmation before rewriting files",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        default=False,
        help="Show a progress bar while processing files",
    )
    add_ignore_arguments(parser)

    parser.add_argument(
        "--enable-logging",
        action="store_true",
        default=False,
        help="Enable detailed logging to file",
    )
    parser.add_argument(
        "--log-file",
        default="comment_remover.log",
        help="Log file path (default: comment_remover.log)",
    )

    args = parser.parse_args(argv)

    setup_logging(args.log_file, args.enable_logging)

    selected_paths = [os.path.abspath(p) for p in args.paths]
    for path in selected_paths:
        if not os.path.exists(path):
            logging.error(f"Invalid path: {path}")
            print(f"Error: Invalid path: {path}")
            sys.exit(1)

    if not args.yes and not confirm(
        "This will permanently remove comments from the selected files. "
        "Are you sure you want to continue?"
    ):
        logging.info("Comment removal cancelled by user")
        print("Comment removal cancelled")
        return

    report = remove_comments(
        selected_paths, ignore_patterns_from_args(args), show_progress=args.progress
    )
    if report.error:
        print(f"Error during comment removal: {report.error}")
        sys.exit(1)

    print(report.message())


if __name__ == "__main__":
    main()
