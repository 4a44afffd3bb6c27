import logging
import os
import stat
import tempfile
from contextlib import contextmanager
from typing import Iterator, List, Optional

from .file_operations import filesystem_operation

log = logging.getLogger(__name__)


def _clear_readonly(path: str) -> None:
    # rmdir/unlink fail on read-only entries on Windows
    if os.name == 'nt' and not os.path.islink(path):
        os.chmod(path, stat.S_IWRITE | stat.S_IREAD)


def delete_tree(directory: str) -> None:
    """
    Delete a directory tree post-order: files first, then their directories.

    Symbolic links are unlinked, never followed.

    Args:
        directory (str): The root of the tree to delete.
    """
    if os.path.islink(directory):
        os.unlink(directory)
        return
    for current, dirnames, filenames in os.walk(directory, topdown=False):
        for name in filenames:
            path = os.path.join(current, name)
            _clear_readonly(path)
            os.unlink(path)
        for name in dirnames:
            path = os.path.join(current, name)
            if os.path.islink(path):
                os.unlink(path)
            else:
                _clear_readonly(path)
                os.rmdir(path)
    _clear_readonly(directory)
    os.rmdir(directory)


def can_create_symlinks(directory: str) -> bool:
    """Symlink creation on Windows needs a privilege or developer mode, try it."""
    target = os.path.join(directory, 'symlink_probe_target')
    link = os.path.join(directory, 'symlink_probe_link')
    with open(target, 'w') as f:
        f.write('probe')
    try:
        os.symlink(target, link)
        return True
    except OSError:
        return False
    finally:
        if os.path.lexists(link):
            os.unlink(link)
        os.remove(target)


class ScenarioFixture:
    """A fresh directory for one scenario, optionally reached through a symbolic link."""

    def __init__(self, directory: str, link: Optional[str] = None) -> None:
        self.directory: str = directory
        self.link: Optional[str] = link
        self.siblings: List[str] = []

    def __repr__(self) -> str:
        return f"ScenarioFixture(directory={self.directory!r}, link={self.link!r})"

    @property
    def target(self) -> str:
        """The path the virtual drive gets bound to."""
        return self.link if self.link is not None else self.directory

    def path(self, *parts: str) -> str:
        return os.path.join(self.directory, *parts)

    def sibling(self, suffix: str) -> str:
        """A not yet existing path next to the directory, removed with the fixture."""
        path = self.directory + suffix
        self.siblings.append(path)
        return path

    def remove(self) -> None:
        for path in [self.link] + self.siblings + [self.directory]:
            if path is None or not os.path.lexists(path):
                continue
            try:
                if os.path.isdir(path) and not os.path.islink(path):
                    delete_tree(path)
                else:
                    os.unlink(path)
            except OSError as e:
                # The workspace deletion at the end of the run gets another go at it
                log.warning('Could not remove %s: %s', path, e)


class TempWorkspace:
    """Root temporary directory of a run, owning every scenario fixture."""

    def __init__(self, root: str) -> None:
        self.root: str = root

    @classmethod
    def create(cls, parent: Optional[str] = None, prefix: str = 'virtual-drive-test') -> 'TempWorkspace':
        with filesystem_operation('create workspace', parent or tempfile.gettempdir()):
            root = tempfile.mkdtemp(prefix=prefix, dir=parent)
        log.info('Created workspace %s', root)
        return cls(root)

    def __repr__(self) -> str:
        return f"TempWorkspace(root={self.root!r})"

    def create_directory(self, prefix: str = 'test') -> str:
        with filesystem_operation('create directory', self.root):
            return tempfile.mkdtemp(prefix=prefix, dir=self.root)

    def create_fixture(self, link: bool = False) -> ScenarioFixture:
        directory = self.create_directory()
        fixture = ScenarioFixture(directory)
        if link:
            fixture.link = directory + '_link'
            with filesystem_operation('create symlink', fixture.link):
                os.symlink(directory, fixture.link, target_is_directory=True)
        return fixture

    @contextmanager
    def fixture(self, link: bool = False) -> Iterator[ScenarioFixture]:
        fixture = self.create_fixture(link=link)
        try:
            yield fixture
        finally:
            fixture.remove()

    def exists(self) -> bool:
        return os.path.lexists(self.root)

    def delete(self) -> None:
        if not self.exists():
            return
        with filesystem_operation('delete workspace', self.root):
            delete_tree(self.root)
        log.info('Deleted workspace %s', self.root)
