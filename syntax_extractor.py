# FILE PATH: syntax_extractor.py
# LOCATION: Root directory of your project
# DESCRIPTION: Main script for extracting folder structure and file contents into one text

"""
Gather a selection of files and folders into a single LLM-friendly text.

Output layout:
1. "File types:" header listing every extension seen in text files
2. Folder structure rendered as an ASCII tree under the common base path
3. File contents, one delimited block per file, with markers for binary
   and ignored files
"""

import os
import sys
import logging
import argparse
from typing import List, Optional, Sequence

from extractor_utils import (
    count_tokens,
    create_header,
    relative_path,
    render_path_lines,
    resolve_base_path,
    setup_logging,
)
from file_traversal import TraversalResult, get_file_content, traverse_directory
from ignore_helper import (
    add_ignore_arguments,
    check_is_ignored,
    ignore_patterns_from_args,
)

DEFAULT_OUTPUT_FILE = "extracted_code.txt"


def format_final_content(combined_result: TraversalResult, base_path: str) -> str:
    """Formats the final content string."""
    header_content = create_header(combined_result.file_types)
    folder_structure_output = f"\n{base_path}\n{combined_result.folder_structure}"
    return (
        f"{header_content}\n\nFolder Structure:{folder_structure_output}"
        f"\n\nFile Contents:\n{combined_result.file_contents}"
    )


def _extract_file(file_path: str, base_path: str, ignore_patterns) -> TraversalResult:
    result = TraversalResult()
    block = get_file_content(file_path, base_path, ignore_patterns)
    rel_path = relative_path(file_path, base_path)
    result.add_file(rel_path, render_path_lines(rel_path), block)
    return result


def extract_code(
    selected_paths: Sequence[str], ignore_patterns: Optional[Sequence[str]] = None
) -> str:
    """
    Extract folder structure and file contents for a selection of paths.

    Args:
        selected_paths: absolute paths of files and directories, in order
        ignore_patterns: effective glob patterns (empty disables ignoring)

    Returns:
        The formatted text, or an empty string for an empty selection or an
        unexpected failure.
    """
    if not selected_paths:
        return ""

    ignore_patterns = list(ignore_patterns or [])
    base_path = resolve_base_path(list(selected_paths))
    logging.info(f"Base path determined: {base_path}")
    logging.info(f"Using ignore patterns: {ignore_patterns}")

    try:
        combined_result = TraversalResult()

        for path in selected_paths:
            if not os.path.exists(path):
                logging.error(f"Selected path does not exist: {path}")
                continue

            is_dir = os.path.isdir(path)
            rel_path = relative_path(path, base_path)

            if rel_path and check_is_ignored(
                rel_path, os.path.basename(path), is_dir, ignore_patterns
            ):
                logging.info(f"Ignoring selected item: {rel_path}")
                continue

            if is_dir:
                result = traverse_directory(path, 0, base_path, ignore_patterns)
            else:
                result = _extract_file(path, base_path, ignore_patterns)
            combined_result.merge(result)

        return format_final_content(combined_result, base_path)
    except Exception as e:
        logging.error(f"Error in extract_code: {str(e)}")
        return ""


def build_clipboard_text(extracted_content: str, initial_prompt: str = "") -> str:
    """Prepend the initial prompt message, separated by a blank line."""
    if not initial_prompt:
        return extracted_content
    return f"{initial_prompt}\n\n{extracted_content}"


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Extract folder structure and file contents into a single text"
    )

    parser.add_argument("paths", nargs="+", help="Files and directories to extract")
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_FILE,
        help=f"Output file path, '-' for stdout (default: {DEFAULT_OUTPUT_FILE})",
    )
    parser.add_argument(
        "--prompt",
        default="",
        help="Initial prompt message placed before the extracted content",
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
        default="syntax_extractor.log",
        help="Log file path (default: syntax_extractor.log)",
    )

    args = parser.parse_args(argv)

    setup_logging(args.log_file, args.enable_logging)

    selected_paths = [os.path.abspath(p) for p in args.paths]
    for path in selected_paths:
        if not os.path.exists(path):
            logging.error(f"Invalid path: {path}")
            print(f"Error: Invalid path: {path}")
            sys.exit(1)

    ignore_patterns = ignore_patterns_from_args(args)
    logging.info(f"Total ignore patterns: {len(ignore_patterns)}")

    extracted_content = extract_code(selected_paths, ignore_patterns)
    if not extracted_content:
        print("Error: Extraction failed, see log for details")
        sys.exit(1)

    final_content = build_clipboard_text(extracted_content, args.prompt)

    if args.output == "-":
        sys.stdout.write(final_content)
        return

    try:
        with open(args.output, "w", encoding="utf-8") as output_file:
            output_file.write(final_content)
    except OSError as e:
        logging.error(f"Error writing output file: {str(e)}")
        print(f"Error writing output file: {str(e)}")
        sys.exit(1)

    # Token count covers the extracted content only, not the prompt
    total_tokens = count_tokens(extracted_content)
    logging.info(f"Total tokens: {total_tokens}")
    print(f"\nExtraction complete!")
    print(f"Total tokens: {total_tokens:,}")
    print(f"Output written to: {args.output}")


if __name__ == "__main__":
    main()
