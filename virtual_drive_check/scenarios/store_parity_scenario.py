from ..assertions import assert_equal, assert_equivalent, assert_same_file
from ..attributes import root_directories, store_attributes
from ..file_operations import list_directory


def store_parity_scenario(drive, workspace):
    with workspace.fixture() as fixture, drive.bound(fixture.target):
        assert_same_file(fixture.directory, drive.root)
        assert_equivalent(store_attributes(fixture.directory), store_attributes(drive.root), 'file stores')

        list_directory(fixture.directory)
        real_roots = root_directories()
        list_directory(drive.root)
        assert_equal('root directories', real_roots, root_directories())
