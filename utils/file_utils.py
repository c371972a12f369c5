"""
File Utilities Module
Reading and writing the documents that go in and out of a review.
"""

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

HTML_EXTENSIONS = {'.html', '.htm'}


def normalize_path(path: Union[str, Path]) -> Path:
    """Convert string path to normalized Path object."""
    return Path(path).resolve()


def is_html_file(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in HTML_EXTENSIONS


def ensure_directory(directory: Path) -> None:
    """Ensure directory exists, create if necessary."""
    directory.mkdir(parents=True, exist_ok=True)


def read_file_content(file_path: Union[str, Path]) -> str:
    """
    Safely read file content with proper encoding.

    Args:
        file_path: Path to the file to read

    Returns:
        File contents as string

    Raises:
        FileNotFoundError: If file doesn't exist
        IOError: If file can't be read
    """
    file_path = normalize_path(file_path)
    if not is_html_file(file_path):
        logger.debug(f"Reading non-HTML file as markup: {file_path}")
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError:
        # Fallback to system default encoding if UTF-8 fails
        logger.warning(f"{file_path} is not valid UTF-8, retrying with default encoding")
        with open(file_path, 'r') as f:
            return f.read()


def write_file_content(file_path: Union[str, Path], content: str) -> Path:
    """Write text to a file, creating parent directories. Returns the resolved path."""
    file_path = normalize_path(file_path)
    try:
        ensure_directory(file_path.parent)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(content)
        logger.debug(f"Wrote {len(content)} characters to {file_path}")
        return file_path
    except OSError as e:
        logger.error(f"Error writing file {file_path}: {str(e)}", exc_info=True)
        raise
