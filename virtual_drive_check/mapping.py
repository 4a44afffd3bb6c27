import errno
import logging
import os
import random
import string
import tempfile
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from .commands import CommandResult, run_command
from .errors import DriveInUseError, FilesystemOperationError

log = logging.getLogger(__name__)


class SubstBackend:
    """Windows `subst`: binds a drive letter such as `T:` to a directory."""

    name = 'subst'
    capabilities = frozenset({'root_deletion'})

    def bind_command(self, drive: 'VirtualDrive', target: str) -> List[str]:
        return ['cmd', '/c', 'subst', drive.name, target]

    def unbind_command(self, drive: 'VirtualDrive') -> List[str]:
        return ['cmd', '/c', 'subst', drive.name, '/d']

    def root(self, drive: 'VirtualDrive') -> str:
        return drive.name + '\\'

    def is_mapped(self, drive: 'VirtualDrive') -> bool:
        return os.path.exists(self.root(drive))


class BindMountBackend:
    """POSIX bind mount of a directory onto an empty mountpoint (needs root)."""

    name = 'bind'
    capabilities = frozenset()

    def bind_command(self, drive: 'VirtualDrive', target: str) -> List[str]:
        return ['mount', '--bind', target, drive.name]

    def unbind_command(self, drive: 'VirtualDrive') -> List[str]:
        return ['umount', drive.name]

    def root(self, drive: 'VirtualDrive') -> str:
        return drive.name

    def is_mapped(self, drive: 'VirtualDrive') -> bool:
        return os.path.ismount(drive.name)


BACKENDS = {backend.name: backend for backend in (SubstBackend, BindMountBackend)}


def default_backend():
    if os.name == 'nt':
        return SubstBackend()
    return BindMountBackend()


def default_drive() -> str:
    """
    Returns the mount point to use when none is given.

    On Windows, `T:` if it is free, otherwise a random unused drive letter.
    On Unix-like systems, a fresh empty directory to mount onto.
    """
    if os.name == 'nt':
        if not os.path.exists('T:'):
            return 'T:'
        drive_letters = [letter for letter in string.ascii_uppercase if letter not in ['A', 'B', 'C']]
        available_letters = [letter for letter in drive_letters if not os.path.exists(f'{letter}:')]
        if not available_letters:
            raise RuntimeError('No free drive letter available')
        return random.choice(available_letters) + ':'
    return tempfile.mkdtemp(prefix='virtual-drive-')


class VirtualDrive:
    """
    Handle on the single reserved mount point.

    At most one binding is held at a time. Use `bound()` so the binding is
    released on every exit path.
    """

    def __init__(self, name: str, backend=None, run: Callable[..., CommandResult] = run_command) -> None:
        self.name: str = name
        self.backend = backend if backend is not None else default_backend()
        self.run = run
        self.target: Optional[str] = None

    def __repr__(self) -> str:
        return f"VirtualDrive(name={self.name!r}, backend={self.backend.name!r}, target={self.target!r})"

    @property
    def root(self) -> str:
        return self.backend.root(self)

    @property
    def capabilities(self) -> frozenset:
        return self.backend.capabilities

    def path(self, *parts: str) -> str:
        return os.path.join(self.root, *parts)

    def is_mapped(self) -> bool:
        return self.backend.is_mapped(self)

    def bind(self, target: str) -> None:
        if self.target is not None:
            raise DriveInUseError(f"{self.name} is already bound to {self.target}")
        if self.is_mapped():
            raise DriveInUseError(f"{self.name} is already mapped outside this handle")
        if not os.path.exists(target):
            raise FilesystemOperationError(errno.ENOENT, f"Cannot bind {self.name}, target does not exist", target)
        self.run(self.backend.bind_command(self, target), fail_on_nonzero_exit=True)
        self.target = target
        log.info('Bound %s to %s', self.name, target)

    def unbind(self) -> CommandResult:
        held = self.target
        result = self.run(self.backend.unbind_command(self), fail_on_nonzero_exit=False)
        self.target = None
        if result.succeeded:
            log.info('Released %s', self.name)
        elif held is not None:
            log.error('Failed to release %s (bound to %s): %s', self.name, held, result.output.strip())
        else:
            log.debug('Nothing to release on %s', self.name)
        return result

    @contextmanager
    def bound(self, target: str) -> Iterator['VirtualDrive']:
        self.bind(target)
        try:
            yield self
        finally:
            self.unbind()
