import errno
import os
import stat
import sys
from dataclasses import dataclass
from typing import Optional, Tuple

import psutil

from .errors import FilesystemOperationError
from .file_operations import read_bytes
from . import win32


@dataclass(frozen=True)
class PathAttributes:
    exists: bool
    readable: bool
    writable: bool
    executable: bool
    hidden: bool
    is_directory: bool
    is_regular_file: bool
    is_symlink: bool
    owner: Optional[str]


@dataclass(frozen=True)
class BasicAttributes:
    """Everything a full attribute read-back returns, links followed. Access time is left out."""
    size: int
    modified_ns: int
    created: Optional[float]
    is_directory: bool
    is_regular_file: bool
    is_symlink: bool
    is_other: bool
    file_key: Tuple[int, int]
    file_attributes: Optional[int]


@dataclass(frozen=True)
class StoreAttributes:
    total_space: int
    usable_space: int
    unallocated_space: int
    block_size: int
    name: str
    type: str


@dataclass(frozen=True)
class AttributeSnapshot:
    attributes: PathAttributes
    content: Optional[bytes] = None
    basic: Optional[BasicAttributes] = None
    store: Optional[StoreAttributes] = None


def _stat(path: str, follow_symlinks: bool = True) -> os.stat_result:
    try:
        return os.stat(path, follow_symlinks=follow_symlinks)
    except OSError as e:
        raise FilesystemOperationError(e.errno, f"stat failed: {e.strerror}", path) from e


def supports_hidden_attribute() -> bool:
    return os.name == 'nt' or (hasattr(os, 'chflags') and hasattr(stat, 'UF_HIDDEN') and sys.platform == 'darwin')


def is_hidden(path: str) -> bool:
    if os.name == 'nt':
        return bool(_stat(path).st_file_attributes & stat.FILE_ATTRIBUTE_HIDDEN)
    if sys.platform == 'darwin' and _stat(path).st_flags & stat.UF_HIDDEN:
        return True
    # Dot files count as hidden on Unix
    name = os.path.basename(os.path.normpath(path))
    return name.startswith('.') and name not in ('.', '..')


def set_hidden(path: str, hidden: bool) -> None:
    """Set or clear the hidden attribute, preserving every other attribute bit."""
    try:
        if os.name == 'nt':
            attributes = win32.get_file_attributes(path)
            if hidden:
                attributes |= win32.FILE_ATTRIBUTE_HIDDEN
            else:
                attributes &= ~win32.FILE_ATTRIBUTE_HIDDEN
            win32.set_file_attributes(path, attributes)
        elif supports_hidden_attribute():
            flags = _stat(path).st_flags
            os.chflags(path, flags | stat.UF_HIDDEN if hidden else flags & ~stat.UF_HIDDEN)
        else:
            raise FilesystemOperationError(errno.ENOTSUP, "hidden attribute is not supported on this platform", path)
    except FilesystemOperationError:
        raise
    except OSError as e:
        raise FilesystemOperationError(e.errno, f"set hidden attribute failed: {e.strerror}", path) from e


def owner_of(path: str) -> str:
    try:
        if os.name == 'nt':
            return win32.get_owner(path)
        import pwd
        uid = os.stat(path).st_uid
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            return str(uid)
    except OSError as e:
        raise FilesystemOperationError(e.errno, f"owner lookup failed: {e.strerror}", path) from e


def set_owner(path: str, owner: str) -> None:
    """Rewrite the owner of `path`, `owner` as returned by `owner_of`."""
    try:
        if os.name == 'nt':
            win32.set_owner(path, owner)
            return
        import pwd
        try:
            uid = pwd.getpwnam(owner).pw_uid
        except KeyError:
            uid = int(owner)
        os.chown(path, uid, -1)
    except ValueError:
        raise FilesystemOperationError(errno.EINVAL, f"unknown owner {owner}", path) from None
    except OSError as e:
        raise FilesystemOperationError(e.errno, f"owner change failed: {e.strerror}", path) from e


def path_attributes(path: str) -> PathAttributes:
    if not os.path.exists(path):
        return PathAttributes(False, False, False, False, False, False, False, os.path.islink(path), None)
    return PathAttributes(
        exists=os.path.exists(path),
        readable=os.access(path, os.R_OK),
        writable=os.access(path, os.W_OK),
        executable=os.access(path, os.X_OK),
        hidden=is_hidden(path),
        is_directory=os.path.isdir(path),
        is_regular_file=os.path.isfile(path),
        is_symlink=os.path.islink(path),
        owner=owner_of(path),
    )


def basic_attributes(path: str) -> BasicAttributes:
    st = _stat(path)
    return BasicAttributes(
        size=st.st_size,
        modified_ns=st.st_mtime_ns,
        created=getattr(st, 'st_birthtime', None),
        is_directory=stat.S_ISDIR(st.st_mode),
        is_regular_file=stat.S_ISREG(st.st_mode),
        is_symlink=stat.S_ISLNK(st.st_mode),
        is_other=not (stat.S_ISDIR(st.st_mode) or stat.S_ISREG(st.st_mode) or stat.S_ISLNK(st.st_mode)),
        file_key=(st.st_dev, st.st_ino),
        file_attributes=getattr(st, 'st_file_attributes', None),
    )


def _partition_for(path: str):
    real_path = os.path.realpath(path)
    best = None
    for partition in psutil.disk_partitions(all=True):
        mountpoint = partition.mountpoint
        if real_path == mountpoint or real_path.startswith(mountpoint.rstrip(os.sep) + os.sep):
            if best is None or len(mountpoint) > len(best.mountpoint):
                best = partition
    return best


def store_attributes(path: str) -> StoreAttributes:
    try:
        usage = psutil.disk_usage(path)
        if os.name == 'nt':
            root = win32.volume_path_name(path)
            name, fs_type = win32.volume_information(root)
            block_size = win32.bytes_per_sector(root)
            unallocated = win32.total_free_bytes(path)
        else:
            stv = os.statvfs(path)
            block_size = stv.f_bsize
            unallocated = stv.f_bfree * stv.f_frsize
            partition = _partition_for(path)
            name, fs_type = (partition.device, partition.fstype) if partition else ('', '')
    except OSError as e:
        raise FilesystemOperationError(e.errno, f"file store query failed: {e.strerror}", path) from e
    return StoreAttributes(
        total_space=usage.total,
        usable_space=usage.free,
        unallocated_space=unallocated,
        block_size=block_size,
        name=name,
        type=fs_type,
    )


def root_directories() -> Tuple[str, ...]:
    """Root directories of the file system namespace, as seen by this process."""
    return tuple(sorted({partition.mountpoint for partition in psutil.disk_partitions(all=True)}))


def read_content(path: str) -> Optional[bytes]:
    if not os.path.isfile(path):
        return None
    return read_bytes(path)


def snapshot(path: str, content: bool = True, basic: bool = False, store: bool = False) -> AttributeSnapshot:
    return AttributeSnapshot(
        attributes=path_attributes(path),
        content=read_content(path) if content else None,
        basic=basic_attributes(path) if basic else None,
        store=store_attributes(path) if store else None,
    )
