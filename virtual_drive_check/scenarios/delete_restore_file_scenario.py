from ..assertions import assert_absent, assert_content, assert_equivalent, assert_same_file
from ..attributes import snapshot
from ..file_operations import copy_file, delete, write_text

CONTENTS = 'Hello world!'


def delete_restore_file_scenario(drive, workspace):
    """Back a file up, delete it through the drive, then copy the backup over its old path."""
    with workspace.fixture() as fixture, drive.bound(fixture.target):
        assert_same_file(fixture.directory, drive.root)
        virtual_file = drive.path('restored.txt')
        real_file = fixture.path('restored.txt')
        write_text(virtual_file, CONTENTS)
        before = snapshot(real_file)

        backup = fixture.sibling('_backup')
        copy_file(virtual_file, backup)
        delete(virtual_file)
        assert_absent(real_file)
        assert_absent(virtual_file)

        copy_file(backup, virtual_file)
        assert_content(real_file, CONTENTS)
        assert_same_file(real_file, virtual_file)
        assert_equivalent(before, snapshot(real_file), 'restored file')
        assert_equivalent(snapshot(real_file), snapshot(virtual_file), 'restored file through both paths')
        delete(backup)
        assert_absent(backup)
