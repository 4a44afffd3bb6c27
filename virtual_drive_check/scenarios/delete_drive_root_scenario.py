from ..assertions import assert_absent, assert_exists, assert_same_file
from ..file_operations import delete


def delete_drive_root_scenario(drive, workspace):
    """Deleting the drive root itself deletes the directory it is bound to."""
    with workspace.fixture() as fixture, drive.bound(fixture.target):
        assert_same_file(fixture.directory, drive.root)
        assert_exists(fixture.directory)
        delete(drive.root)
        assert_absent(fixture.directory)
