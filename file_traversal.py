# FILE PATH: file_traversal.py
# LOCATION: Root directory of your project
# DESCRIPTION: Ignore-aware directory walker and per-file content blocks

"""
Directory traversal shared by the extractor and the comment remover.

``walk_directory`` is the only place that lists, sorts and filters directory
children. ``traverse_directory`` turns the walk into a folder structure and a
content dump; ``iter_selected_files`` applies the same walk to a whole
selection for callers that only care about files.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Set

from content_classifier import decode_text, is_binary
from extractor_utils import file_extension, relative_path, render_tree_line
from ignore_helper import check_is_ignored

TEXT = "text"
BINARY = "binary"
IGNORED = "ignored"
ERROR = "error"


@dataclass(frozen=True)
class WalkEntry:
    """One visited file or directory, in walk order."""

    path: str
    relative_path: str
    name: str
    is_dir: bool
    depth: int
    is_last: bool
    is_symlink: bool = False


@dataclass(frozen=True)
class FileBlock:
    """The rendered unit for one file: its content or a marker."""

    relative_path: str
    kind: str
    body: str = ""

    @property
    def is_marker(self) -> bool:
        return self.kind in (BINARY, IGNORED)

    def render(self) -> str:
        if self.kind == BINARY:
            return f"\n--- {self.relative_path} [BINARY FILE] \n"
        if self.kind == IGNORED:
            return f"\n--- {self.relative_path} [IGNORED BY PATTERN] \n"
        if self.kind == ERROR:
            return f"\n-{self.relative_path}-\nError reading file: {self.body}\n"
        return f"\n-{self.relative_path}-\n{self.body}\n"


@dataclass
class TraversalResult:
    files: Set[str] = field(default_factory=set)
    file_types: Set[str] = field(default_factory=set)
    folder_structure: str = ""
    file_contents: str = ""

    def merge(self, other: "TraversalResult") -> "TraversalResult":
        """Append ``other`` after this result, keeping traversal order."""
        self.files |= other.files
        self.file_types |= other.file_types
        self.folder_structure += other.folder_structure
        self.file_contents += other.file_contents
        return self

    def add_file(self, rel_path: str, tree_lines: str, block: FileBlock):
        self.files.add(rel_path)
        if not block.is_marker:
            ext = file_extension(rel_path)
            if ext:
                self.file_types.add(ext)
        self.folder_structure += tree_lines
        self.file_contents += block.render()


@dataclass(frozen=True)
class _Child:
    path: str
    relative_path: str
    name: str
    is_dir: bool
    is_symlink: bool = False


def list_directory_children(
    directory: str, base_path: str, ignore_patterns: Optional[Sequence[str]]
) -> List[_Child]:
    """
    Sorted, non-ignored children of ``directory``.

    Directories come first, then files, each group ordered by name. Raises
    OSError when the directory cannot be listed.
    """
    children = []
    with os.scandir(directory) as entries:
        for entry in entries:
            # Links are listed as leaves and never descended into
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_symlink = entry.is_symlink()
            except OSError:
                is_dir = False
                is_symlink = False
            children.append(
                _Child(
                    path=entry.path,
                    relative_path=relative_path(entry.path, base_path),
                    name=entry.name,
                    is_dir=is_dir,
                    is_symlink=is_symlink,
                )
            )

    children.sort(key=lambda c: (not c.is_dir, c.name.lower(), c.name))

    visible = []
    for child in children:
        if check_is_ignored(child.relative_path, child.name, child.is_dir, ignore_patterns):
            logging.debug(f"Ignoring: {child.relative_path}")
            continue
        visible.append(child)
    return visible


def walk_directory(
    directory: str,
    base_path: str,
    ignore_patterns: Optional[Sequence[str]] = None,
    depth: int = 0,
    is_last: bool = True,
) -> Iterator[WalkEntry]:
    """
    Walk ``directory`` depth-first, yielding each surviving entry.

    The directory itself is yielded first unless it is the base path. An
    ignored directory yields nothing at all, and an unreadable one is logged
    and treated as empty.
    """
    rel_dir = relative_path(directory, base_path)
    dir_name = os.path.basename(directory)

    if rel_dir and check_is_ignored(rel_dir, dir_name, True, ignore_patterns):
        logging.debug(f"Ignoring directory: {rel_dir}")
        return

    try:
        children = list_directory_children(directory, base_path, ignore_patterns)
    except OSError as e:
        logging.error(f"Error traversing directory {directory}: {str(e)}")
        return

    if rel_dir:
        yield WalkEntry(directory, rel_dir, dir_name, True, depth, is_last)
        depth += 1

    for index, child in enumerate(children):
        child_is_last = index == len(children) - 1
        if child.is_dir:
            yield from walk_directory(
                child.path, base_path, ignore_patterns, depth, child_is_last
            )
        else:
            yield WalkEntry(
                child.path,
                child.relative_path,
                child.name,
                False,
                depth,
                child_is_last,
                child.is_symlink,
            )


def get_file_content(
    file_path: str, base_path: str, ignore_patterns: Optional[Sequence[str]] = None
) -> FileBlock:
    """Read one file into a FileBlock; never raises for filesystem problems."""
    rel_path = relative_path(file_path, base_path)
    file_name = os.path.basename(file_path)

    if check_is_ignored(rel_path, file_name, False, ignore_patterns):
        logging.debug(f"Ignoring file: {rel_path}")
        return FileBlock(rel_path, IGNORED)

    try:
        with open(file_path, "rb") as f:
            data = f.read()
    except OSError as e:
        logging.error(f"Error reading file {file_path}: {str(e)}")
        return FileBlock(rel_path, ERROR, str(e))

    if is_binary(file_path, data):
        return FileBlock(rel_path, BINARY)

    decoded = decode_text(data)
    if decoded.encoding != "utf-8":
        logging.warning(f"File {file_path} read with {decoded.encoding} encoding")
    return FileBlock(rel_path, TEXT, decoded.text.rstrip())


def traverse_directory(
    directory: str,
    depth: int = 0,
    base_path: str = "",
    ignore_patterns: Optional[Sequence[str]] = None,
) -> TraversalResult:
    """
    Build the folder structure and file contents for one directory.

    Returns a fresh TraversalResult; an ignored or unreadable directory gives
    an empty one.
    """
    result = TraversalResult()
    for entry in walk_directory(directory, base_path, ignore_patterns, depth):
        tree_line = render_tree_line(entry.depth, entry.is_last, entry.name, entry.is_dir)
        if entry.is_dir:
            result.folder_structure += tree_line
            continue
        block = get_file_content(entry.path, base_path, ignore_patterns)
        result.add_file(entry.relative_path, tree_line, block)
    return result


def iter_selected_files(
    selected_paths: Sequence[str],
    base_path: str,
    ignore_patterns: Optional[Sequence[str]] = None,
) -> Iterator[WalkEntry]:
    """
    Yield every non-ignored file of a selection, walking selected directories.

    Symbolic links found during the walk are skipped, so callers that write
    files never reach outside the selection through one.
    """
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
            for entry in walk_directory(path, base_path, ignore_patterns):
                if entry.is_symlink:
                    logging.debug(f"Skipping symbolic link: {entry.relative_path}")
                elif not entry.is_dir:
                    yield entry
        else:
            yield WalkEntry(path, rel_path, os.path.basename(path), False, 0, True)
