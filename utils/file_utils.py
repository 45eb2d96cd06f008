"""
File Utilities Module
Collects template source files and reads them for class extraction.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional

from core.config import EXTENSION_GROUPS, source_extensions


def normalize_path(path: str | Path) -> Path:
    """Convert string path to normalized Path object."""
    return Path(path).resolve()


def is_hidden(path: Path) -> bool:
    """Check if a file or directory is hidden (dot-prefixed)."""
    return path.name.startswith('.')


def dialect_for(path: Path) -> Optional[str]:
    """Extension group a file belongs to ('html', 'jsx', 'vue', ...), or None."""
    suffix = path.suffix.lower()
    for group, extensions in EXTENSION_GROUPS.items():
        if suffix in extensions:
            return group
    return None


def get_all_files_by_extension(path: str | Path, extensions: Optional[Iterable[str]] = None) -> List[Path]:
    """
    Recursively collect all files with the given extensions.

    Args:
        path: Base directory path
        extensions: Extensions to collect (e.g. ['.vue', '.tsx']); defaults to every template source type

    Returns:
        Sorted list of matching file paths; hidden files/directories and node_modules are skipped
    """
    base_path = normalize_path(path)
    wanted = {ext.lower() for ext in (extensions or source_extensions())}
    matching_files = []

    for root, dirs, files in os.walk(base_path):
        dirs[:] = [d for d in dirs if d != 'node_modules' and not is_hidden(Path(root) / d)]

        for file in files:
            file_path = Path(root) / file
            if is_hidden(file_path):
                continue
            if file_path.suffix.lower() in wanted:
                matching_files.append(file_path)

    return sorted(matching_files)


def read_file_content(file_path: Path) -> str:
    """
    Read file content as text.

    Raises:
        FileNotFoundError: If file doesn't exist
        OSError: If file can't be read
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError:
        # Fallback to system default encoding if UTF-8 fails
        with open(file_path, 'r') as f:
            return f.read()
