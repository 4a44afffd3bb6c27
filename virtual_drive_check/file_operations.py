import errno
import os
import shutil
import tempfile
from contextlib import contextmanager
from typing import Iterator, List, Optional

from .errors import FilesystemOperationError


@contextmanager
def filesystem_operation(description: str, path: str) -> Iterator[None]:
    """Re-raise any OSError of the block as a FilesystemOperationError naming the operation."""
    try:
        yield
    except FilesystemOperationError:
        raise
    except OSError as e:
        raise FilesystemOperationError(e.errno, f"{description} failed: {e.strerror}", e.filename or path) from e


def create_file(path: str) -> None:
    with filesystem_operation('create', path):
        with open(path, 'x'):
            pass


def create_temp_file(directory: str, prefix: str, suffix: str) -> str:
    with filesystem_operation('create temp file', directory):
        fd, path = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=directory)
        os.close(fd)
    return path


def write_text(path: str, contents: str) -> None:
    with filesystem_operation('write', path):
        with open(path, 'w', encoding='utf-8') as f:
            f.write(contents)


def read_text(path: str) -> str:
    with filesystem_operation('read', path):
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()


def read_bytes(path: str) -> bytes:
    with filesystem_operation('read', path):
        with open(path, 'rb') as f:
            return f.read()


def list_directory(path: str) -> List[str]:
    with filesystem_operation('list', path):
        return os.listdir(path)


def copy_file(source: str, destination: str) -> None:
    with filesystem_operation('copy', source):
        if os.path.lexists(destination):
            raise FileExistsError(errno.EEXIST, 'File exists', destination)
        shutil.copy2(source, destination)


def copy_tree(source: str, destination: str) -> None:
    with filesystem_operation('copy tree', source):
        shutil.copytree(source, destination, symlinks=True)


def move(source: str, destination: str) -> None:
    with filesystem_operation('move', source):
        if os.path.lexists(destination):
            raise FileExistsError(errno.EEXIST, 'File exists', destination)
        shutil.move(source, destination)


def delete(path: str) -> None:
    """Delete a file, a symlink or an empty directory."""
    with filesystem_operation('delete', path):
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.unlink(path)


def create_symlink(link: str, target: str, target_is_directory: Optional[bool] = None) -> None:
    if target_is_directory is None:
        target_is_directory = os.path.isdir(target)
    with filesystem_operation('create symlink', link):
        os.symlink(target, link, target_is_directory=target_is_directory)


def create_directory(path: str) -> None:
    with filesystem_operation('mkdir', path):
        os.mkdir(path)
