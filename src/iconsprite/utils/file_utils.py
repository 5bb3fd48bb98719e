"""File system helpers for the icon sprite builder.

Provides a consistent interface for the few file system operations the
application needs: reading icons and configuration, probing the output path,
and writing the finished sprite.
"""

from pathlib import Path

from iconsprite.utils.path_utils import path_resolver

PathLike = str | Path


def read_text(file_path: PathLike) -> str:
    """Read text content from a file.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        The text content of the file

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read due to permissions
        UnicodeDecodeError: If the file content cannot be decoded as text
    """
    normalized_path = path_resolver.normalize_path(file_path)
    with open(normalized_path, encoding="utf-8") as f:
        return f.read()


def read_bytes(file_path: PathLike) -> bytes:
    """Read binary content from a file.

    Icons are read as bytes so the XML parser can honor the encoding
    declared in the document.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        The binary content of the file

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read due to permissions
        IsADirectoryError: If the path points to a directory
    """
    normalized_path = path_resolver.normalize_path(file_path)
    with open(normalized_path, "rb") as f:
        return f.read()


def write_text(file_path: PathLike, content: str, make_dirs: bool = True) -> None:
    """Write text content to a file.

    Args:
        file_path: Path to the file (string or Path object)
        content: Text content to write
        make_dirs: Whether to create parent directories if they don't exist

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
        IsADirectoryError: If the path points to a directory
    """
    normalized_path = path_resolver.normalize_path(file_path)

    if make_dirs:
        ensure_dir_exists(normalized_path.parent)

    with open(normalized_path, "w", encoding="utf-8") as f:
        f.write(content)


def ensure_dir_exists(dir_path: PathLike) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Wrapper around path_resolver.ensure_dir_exists for API consistency.

    Args:
        dir_path: Directory path (string or Path object)

    Returns:
        Path to the directory
    """
    return path_resolver.ensure_dir_exists(dir_path)


def file_exists(file_path: PathLike) -> bool:
    """Check if a regular file exists.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        True if the file exists, False otherwise
    """
    normalized_path = path_resolver.normalize_path(file_path)
    return normalized_path.exists() and normalized_path.is_file()
