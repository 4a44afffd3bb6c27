from ..assertions import assert_equivalent, assert_exists, assert_same_file
from ..attributes import path_attributes
from ..file_operations import copy_tree


def copy_drive_root_scenario(drive, workspace):
    with workspace.fixture() as fixture, drive.bound(fixture.target):
        assert_same_file(fixture.directory, drive.root)
        copy = fixture.sibling('_copy')
        copy_tree(drive.root, copy)
        assert_exists(copy)
        assert_equivalent(path_attributes(drive.root), path_attributes(copy), 'drive root and copy attributes')
