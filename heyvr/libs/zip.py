import io
import os
import zipfile
from heyvr.libs.streams import LogStream


class ArchiveError(Exception):
    """Raised when the game directory cannot be packaged."""


def zip_directory(directory_path: str, stream: LogStream) -> bytes:
    """
    Create an in-memory zip archive of a game directory.

    The directory contents become the archive root, so the game's
    index.html ends up at the top level of the zip.

    Args:
        directory_path: Path to the game directory
        stream: LogStream instance for logging progress
    Returns:
        The compressed archive bytes
    Raises:
        ArchiveError: If the directory cannot be read or compressed
    """
    if not os.path.isdir(directory_path):
        raise ArchiveError(f"Not a directory: {directory_path}")

    buffer = io.BytesIO()
    file_count = 0
    try:
        with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_DEFLATED, compresslevel=9) as zf:
            for root, dirs, files in os.walk(directory_path):
                dirs.sort()
                for name in sorted(files):
                    file_path = os.path.join(root, name)
                    arcname = os.path.relpath(file_path, directory_path).replace(os.sep, '/')
                    zf.write(file_path, arcname=arcname)
                    file_count += 1
    except (OSError, ValueError) as e:
        stream.log(f"Error creating zip: {str(e)}", level="error")
        raise ArchiveError(f"Error creating zip: {str(e)}") from e

    game_file = buffer.getvalue()
    stream.log(f"Compressed {file_count} files from {directory_path}")
    return game_file
