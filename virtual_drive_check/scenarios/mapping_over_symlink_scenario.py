import os

from ..assertions import assert_absent, assert_content, assert_equivalent, assert_exists, assert_true
from ..attributes import basic_attributes
from ..file_operations import copy_file, create_temp_file, move, write_text

CONTENTS = 'Hello world!'


def mapping_over_symlink_scenario(drive, workspace):
    """
    Bind the drive to a symbolic link instead of the directory itself.

    Files created, copied and moved through the drive must show up, with the
    same content, in a second independent temp directory and in the real
    directory behind the link.
    """
    with workspace.fixture(link=True) as fixture, drive.bound(fixture.target):
        assert_equivalent(basic_attributes(fixture.directory), basic_attributes(drive.root), 'drive root and link target attributes')
        assert_true(f'{drive.root} writable', os.access(drive.root, os.W_OK))

        temp_file = create_temp_file(drive.root, 'prefix', 'suffix')
        real_file = fixture.path(os.path.basename(temp_file))
        write_text(temp_file, CONTENTS)
        assert_content(temp_file, CONTENTS)
        assert_content(real_file, CONTENTS)

        with workspace.fixture() as other:
            copy = other.path('copied')
            copy_file(temp_file, copy)
            assert_exists(copy)
            assert_content(copy, CONTENTS)

            cut = other.path('cut')
            move(temp_file, cut)
            assert_absent(temp_file)
            assert_absent(real_file)
            assert_exists(cut)
            assert_content(cut, CONTENTS)

            #Round trip back through the drive
            returned = drive.path('returned')
            move(cut, returned)
            assert_absent(cut)
            assert_content(fixture.path('returned'), CONTENTS)
