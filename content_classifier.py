# FILE PATH: content_classifier.py
# LOCATION: Root directory of your project
# DESCRIPTION: Binary detection and encoding fallback for file contents

"""
Binary-vs-text detection and tolerant decoding for file contents.
"""

import os
import mimetypes
from typing import NamedTuple

SNIFF_SIZE = 8192
NON_TEXT_RATIO = 0.30

TEXT_EXTENSIONS = {
    ".py",
    ".js",
    ".jsx",
    ".ts",
    ".tsx",
    ".mjs",
    ".cjs",
    ".vue",
    ".html",
    ".htm",
    ".css",
    ".scss",
    ".less",
    ".json",
    ".xml",
    ".svg",
    ".yml",
    ".yaml",
    ".toml",
    ".md",
    ".rst",
    ".txt",
    ".csv",
    ".sql",
    ".sh",
    ".bat",
    ".ps1",
    ".ini",
    ".cfg",
    ".conf",
    ".log",
    ".java",
    ".c",
    ".cpp",
    ".h",
    ".hpp",
    ".cs",
    ".php",
    ".rb",
    ".go",
    ".rs",
    ".kt",
    ".kts",
    ".swift",
    ".scala",
    ".r",
}

BINARY_EXTENSIONS = {
    ".pyc",
    ".pyo",
    ".pyd",
    ".so",
    ".dll",
    ".exe",
    ".bin",
    ".class",
    ".jar",
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".ico",
    ".webp",
    ".mp3",
    ".mp4",
    ".avi",
    ".mov",
    ".wav",
    ".pdf",
    ".zip",
    ".tar",
    ".gz",
    ".7z",
    ".woff",
    ".woff2",
    ".ttf",
    ".otf",
    ".sqlite",
    ".db",
}

# Printable ASCII plus the usual control characters found in text files
TEXT_CHARS = bytearray({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x7F)))


class DecodedText(NamedTuple):
    text: str
    encoding: str


def looks_binary(sample: bytes) -> bool:
    """Heuristic: detect if data looks binary from a sample chunk."""
    if not sample:
        return False
    if b"\x00" in sample:
        return True
    try:
        sample.decode("utf-8")
        return False
    except UnicodeDecodeError as e:
        # A multi-byte character cut off at the end of the sample is still text
        if e.start >= len(sample) - 3 and e.reason == "unexpected end of data":
            return False
    nontext = sum(b not in TEXT_CHARS for b in sample)
    return (nontext / len(sample)) > NON_TEXT_RATIO


def is_binary(file_path: str, data: bytes) -> bool:
    """
    Classify a file as binary using its extension first and its bytes second.
    """
    ext = os.path.splitext(file_path)[1].lower()
    if ext in TEXT_EXTENSIONS:
        return False
    if ext in BINARY_EXTENSIONS:
        return True

    mime_type, _ = mimetypes.guess_type(file_path)
    if mime_type and mime_type.startswith("text"):
        return False

    return looks_binary(data[:SNIFF_SIZE])


def decode_text(data: bytes) -> DecodedText:
    """Decode as UTF-8, falling back to Latin-1 which accepts any byte sequence."""
    try:
        return DecodedText(data.decode("utf-8"), "utf-8")
    except UnicodeDecodeError:
        return DecodedText(data.decode("latin-1"), "latin-1")
