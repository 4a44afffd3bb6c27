import dataclasses
import os
import shutil
import tempfile
import unittest

from virtual_drive_check.assertions import (assert_absent, assert_content, assert_equal, assert_equivalent,
                                            assert_exists, assert_same_file, diff)
from virtual_drive_check.attributes import (basic_attributes, is_hidden, owner_of, path_attributes, root_directories,
                                            set_hidden, set_owner, snapshot, store_attributes,
                                            supports_hidden_attribute)
from virtual_drive_check.errors import EquivalenceError, FilesystemOperationError


class TestAttributes(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.file_path = os.path.join(self.temp_dir, 'testfile')
        with open(self.file_path, 'w') as f:
            f.write('test data')

    def test_file_attributes(self):
        attributes = path_attributes(self.file_path)
        self.assertTrue(attributes.exists)
        self.assertTrue(attributes.readable)
        self.assertTrue(attributes.is_regular_file)
        self.assertFalse(attributes.is_directory)
        self.assertFalse(attributes.is_symlink)
        self.assertFalse(attributes.hidden)
        self.assertEqual(attributes.owner, owner_of(self.file_path))

    def test_directory_attributes(self):
        attributes = path_attributes(self.temp_dir)
        self.assertTrue(attributes.is_directory)
        self.assertFalse(attributes.is_regular_file)
        self.assertTrue(attributes.writable)

    def test_missing_path(self):
        attributes = path_attributes(os.path.join(self.temp_dir, 'nonexistent'))
        self.assertFalse(attributes.exists)
        self.assertIsNone(attributes.owner)

    def test_symlink_attributes(self):
        if os.name == 'nt':
            self.skipTest('Symlink creation needs a privilege on Windows')
        link = os.path.join(self.temp_dir, 'link')
        os.symlink(self.file_path, link)
        self.assertTrue(path_attributes(link).is_symlink)
        #The full read-back follows the link
        self.assertEqual(basic_attributes(link), basic_attributes(self.file_path))

    def test_snapshot_of_same_path_is_equal(self):
        self.assertEqual(snapshot(self.file_path, basic=True), snapshot(self.file_path, basic=True))
        self.assertEqual(snapshot(self.file_path).content, b'test data')
        self.assertIsNone(snapshot(self.temp_dir).content)

    def test_snapshots_differ_by_content(self):
        other = os.path.join(self.temp_dir, 'otherfile')
        with open(other, 'w') as f:
            f.write('other data')
        divergences = diff(snapshot(self.file_path), snapshot(other))
        self.assertEqual([field for field, _, _ in divergences], ['content'])

    def test_dot_files_are_hidden_on_unix(self):
        if os.name == 'nt':
            self.skipTest('Windows uses the hidden attribute')
        dot_file = os.path.join(self.temp_dir, '.hidden')
        with open(dot_file, 'w') as f:
            f.write('')
        self.assertTrue(is_hidden(dot_file))
        self.assertFalse(is_hidden(self.file_path))

    def test_set_hidden(self):
        if not supports_hidden_attribute():
            with self.assertRaises(FilesystemOperationError):
                set_hidden(self.file_path, True)
            return
        set_hidden(self.file_path, True)
        self.assertTrue(is_hidden(self.file_path))
        set_hidden(self.file_path, False)
        self.assertFalse(is_hidden(self.file_path))

    def test_set_owner_to_current_owner(self):
        owner = owner_of(self.file_path)
        set_owner(self.file_path, owner)
        self.assertEqual(owner_of(self.file_path), owner)

    def test_set_unknown_owner(self):
        with self.assertRaises(FilesystemOperationError):
            set_owner(self.file_path, 'no-such-account-for-virtual-drive-check')

    def test_store_attributes(self):
        store = store_attributes(self.temp_dir)
        self.assertGreater(store.total_space, 0)
        self.assertGreater(store.block_size, 0)
        self.assertLessEqual(store.usable_space, store.total_space)
        self.assertLessEqual(store.unallocated_space, store.total_space)

    def test_store_attributes_missing_path(self):
        with self.assertRaises(FilesystemOperationError):
            store_attributes(os.path.join(self.temp_dir, 'nonexistent'))

    def test_root_directories(self):
        roots = root_directories()
        self.assertEqual(list(roots), sorted(roots))
        if os.name != 'nt':
            self.assertIn('/', roots)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)


class TestAssertions(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def test_diff_names_nested_fields(self):
        attributes = path_attributes(self.temp_dir)
        hidden = dataclasses.replace(attributes, hidden=not attributes.hidden)
        divergences = diff(snapshot(self.temp_dir), dataclasses.replace(snapshot(self.temp_dir), attributes=hidden))
        self.assertEqual(divergences, [('attributes.hidden', attributes.hidden, not attributes.hidden)])

    def test_assert_equivalent_reports_both_values(self):
        attributes = path_attributes(self.temp_dir)
        other = dataclasses.replace(attributes, owner='somebody-else')
        with self.assertRaises(EquivalenceError) as cm:
            assert_equivalent(attributes, other, 'directory attributes')
        self.assertIn('owner', str(cm.exception))
        self.assertIn('somebody-else', str(cm.exception))
        self.assertIsInstance(cm.exception, AssertionError)
        assert_equivalent(attributes, path_attributes(self.temp_dir), 'directory attributes')

    def test_existence_and_content(self):
        file_path = os.path.join(self.temp_dir, 'testfile')
        with self.assertRaises(EquivalenceError):
            assert_exists(file_path)
        assert_absent(file_path)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write('Hello world!')
        assert_exists(file_path)
        assert_content(file_path, 'Hello world!')
        with self.assertRaises(EquivalenceError):
            assert_content(file_path, 'Hello')
        with self.assertRaises(EquivalenceError):
            assert_absent(file_path)

    def test_same_file(self):
        first = os.path.join(self.temp_dir, 'first')
        second = os.path.join(self.temp_dir, 'second')
        for path in (first, second):
            with open(path, 'w') as f:
                f.write('same content')
        assert_same_file(first, os.path.join(self.temp_dir, '.', 'first'))
        #Equal content is not enough
        with self.assertRaises(EquivalenceError):
            assert_same_file(first, second)
        #A path that cannot be resolved is an I/O failure, not a divergence
        with self.assertRaises(FilesystemOperationError):
            assert_same_file(first, os.path.join(self.temp_dir, 'missing'))

    def test_assert_equal(self):
        assert_equal('roots', ('/',), ('/',))
        with self.assertRaises(EquivalenceError):
            assert_equal('roots', ('/',), ('/', '/mnt'))

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)


if __name__ == '__main__':
    unittest.main()
