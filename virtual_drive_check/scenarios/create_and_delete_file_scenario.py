from ..assertions import assert_absent, assert_content, assert_equivalent, assert_exists, assert_same_file, assert_true
from ..attributes import snapshot
from ..file_operations import create_file, delete, write_text

CONTENTS = 'Hello world!'


def create_and_delete_file_scenario(drive, workspace):
    with workspace.fixture() as fixture, drive.bound(fixture.target):
        assert_same_file(fixture.directory, drive.root)

        virtual_file = drive.path('testFile.txt')
        real_file = fixture.path('testFile.txt')
        create_file(virtual_file)
        assert_exists(virtual_file)
        assert_exists(real_file)

        write_text(virtual_file, CONTENTS)
        assert_content(virtual_file, CONTENTS)
        assert_content(real_file, CONTENTS)

        #Other direction: written through the real path, read through the drive
        write_text(real_file, CONTENTS + ' again')
        assert_content(virtual_file, CONTENTS + ' again')
        assert_equivalent(snapshot(real_file), snapshot(virtual_file), 'testFile.txt snapshots')

        delete(virtual_file)
        assert_absent(real_file)
        assert_absent(virtual_file)

        create_file(real_file)
        assert_exists(virtual_file)
        delete(real_file)
        assert_absent(virtual_file)

    assert_true(f'{drive.name} released', not drive.is_mapped())
