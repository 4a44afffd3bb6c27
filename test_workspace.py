import os
import shutil
import stat
import tempfile
import unittest

from virtual_drive_check.errors import FilesystemOperationError
from virtual_drive_check.file_operations import (copy_file, create_file, delete, list_directory, move, read_bytes, read_text,
                                                 write_text)
from virtual_drive_check.workspace import TempWorkspace, can_create_symlinks, delete_tree


class TestTempWorkspace(unittest.TestCase):
    def setUp(self):
        self.parent = tempfile.mkdtemp()
        self.workspace = TempWorkspace.create(self.parent)

    def test_create(self):
        self.assertTrue(os.path.isdir(self.workspace.root))
        self.assertEqual(os.path.dirname(self.workspace.root), self.parent)
        self.assertTrue(os.path.basename(self.workspace.root).startswith('virtual-drive-test'))

    def test_fixtures_are_fresh_and_removed(self):
        with self.workspace.fixture() as first:
            with open(first.path('file'), 'w') as f:
                f.write('data')
        with self.workspace.fixture() as second:
            self.assertNotEqual(first.directory, second.directory)
            self.assertEqual(os.listdir(second.directory), [])
        self.assertFalse(os.path.exists(first.directory))
        self.assertFalse(os.path.exists(second.directory))
        self.assertEqual(os.listdir(self.workspace.root), [])

    def test_fixture_removed_when_scenario_fails(self):
        with self.assertRaises(RuntimeError):
            with self.workspace.fixture() as fixture:
                raise RuntimeError('scenario failed')
        self.assertFalse(os.path.exists(fixture.directory))

    def test_link_fixture(self):
        if not can_create_symlinks(self.workspace.root):
            self.skipTest('Symlinks cannot be created here')
        with self.workspace.fixture(link=True) as fixture:
            self.assertEqual(fixture.target, fixture.link)
            self.assertEqual(fixture.link, fixture.directory + '_link')
            self.assertTrue(os.path.islink(fixture.link))
            self.assertTrue(os.path.samefile(fixture.link, fixture.directory))
        self.assertFalse(os.path.lexists(fixture.link))
        self.assertFalse(os.path.exists(fixture.directory))

    def test_fixture_siblings_are_removed(self):
        with self.workspace.fixture() as fixture:
            copy = fixture.sibling('_copy')
            self.assertFalse(os.path.exists(copy))
            shutil.copytree(fixture.directory, copy)
        self.assertFalse(os.path.exists(copy))

    def test_fixture_directory_already_gone(self):
        with self.workspace.fixture() as fixture:
            os.rmdir(fixture.directory)
        self.assertEqual(os.listdir(self.workspace.root), [])

    def test_delete(self):
        with open(os.path.join(self.workspace.create_directory(), 'leftover'), 'w') as f:
            f.write('data')
        self.workspace.delete()
        self.assertFalse(self.workspace.exists())
        #Deleting twice is a no-op
        self.workspace.delete()

    def tearDown(self):
        shutil.rmtree(self.parent, ignore_errors=True)


class TestDeleteTree(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def test_nested_tree(self):
        root = os.path.join(self.temp_dir, 'root')
        os.makedirs(os.path.join(root, 'a', 'b', 'c'))
        for directory in ('a', os.path.join('a', 'b'), os.path.join('a', 'b', 'c')):
            with open(os.path.join(root, directory, 'file.txt'), 'w') as f:
                f.write('data')
        delete_tree(root)
        self.assertFalse(os.path.exists(root))

    def test_symlinks_are_not_followed(self):
        if not can_create_symlinks(self.temp_dir):
            self.skipTest('Symlinks cannot be created here')
        outside = os.path.join(self.temp_dir, 'outside')
        os.mkdir(outside)
        with open(os.path.join(outside, 'keep.txt'), 'w') as f:
            f.write('keep me')
        root = os.path.join(self.temp_dir, 'root')
        os.mkdir(root)
        os.symlink(outside, os.path.join(root, 'dir_link'), target_is_directory=True)
        os.symlink(os.path.join(outside, 'keep.txt'), os.path.join(root, 'file_link'))
        delete_tree(root)
        self.assertFalse(os.path.exists(root))
        self.assertTrue(os.path.exists(os.path.join(outside, 'keep.txt')))

    def test_read_only_file(self):
        root = os.path.join(self.temp_dir, 'root')
        os.mkdir(root)
        file_path = os.path.join(root, 'readonly')
        with open(file_path, 'w') as f:
            f.write('data')
        os.chmod(file_path, stat.S_IREAD)
        delete_tree(root)
        self.assertFalse(os.path.exists(root))

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)


class TestFileOperations(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.file_path = os.path.join(self.temp_dir, 'testfile')

    def test_write_read(self):
        write_text(self.file_path, 'Hello world!')
        self.assertEqual(read_text(self.file_path), 'Hello world!')

    def test_read_bytes(self):
        write_text(self.file_path, 'Hello world!')
        self.assertEqual(read_bytes(self.file_path), b'Hello world!')
        with self.assertRaises(FilesystemOperationError):
            read_bytes(os.path.join(self.temp_dir, 'nonexistent'))

    def test_list_directory(self):
        write_text(self.file_path, 'data')
        self.assertEqual(list_directory(self.temp_dir), ['testfile'])
        with self.assertRaises(FilesystemOperationError) as cm:
            list_directory(os.path.join(self.temp_dir, 'nonexistent'))
        self.assertIn('list failed', str(cm.exception))

    def test_errors_are_wrapped(self):
        with self.assertRaises(FilesystemOperationError) as cm:
            read_text(os.path.join(self.temp_dir, 'nonexistent'))
        self.assertIsInstance(cm.exception, OSError)
        self.assertIn('read failed', str(cm.exception))
        with self.assertRaises(FilesystemOperationError):
            write_text(os.path.join(self.temp_dir, 'missing_parent', 'file'), 'data')

    def test_create_file_twice(self):
        create_file(self.file_path)
        with self.assertRaises(FilesystemOperationError):
            create_file(self.file_path)

    def test_copy_and_move_refuse_to_overwrite(self):
        write_text(self.file_path, 'source')
        destination = os.path.join(self.temp_dir, 'destination')
        write_text(destination, 'destination')
        with self.assertRaises(FilesystemOperationError):
            copy_file(self.file_path, destination)
        with self.assertRaises(FilesystemOperationError):
            move(self.file_path, destination)
        self.assertEqual(read_text(destination), 'destination')

    def test_move(self):
        write_text(self.file_path, 'moved')
        destination = os.path.join(self.temp_dir, 'destination')
        move(self.file_path, destination)
        self.assertFalse(os.path.exists(self.file_path))
        self.assertEqual(read_text(destination), 'moved')

    def test_delete(self):
        write_text(self.file_path, 'data')
        delete(self.file_path)
        self.assertFalse(os.path.exists(self.file_path))
        directory = os.path.join(self.temp_dir, 'dir')
        os.mkdir(directory)
        delete(directory)
        self.assertFalse(os.path.exists(directory))
        with self.assertRaises(FilesystemOperationError):
            delete(directory)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)


if __name__ == '__main__':
    unittest.main()
