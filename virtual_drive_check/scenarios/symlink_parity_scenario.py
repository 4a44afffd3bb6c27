import dataclasses

from ..assertions import assert_content, assert_equivalent, assert_same_file, assert_true
from ..attributes import path_attributes
from ..file_operations import create_symlink, write_text

CONTENTS = 'Hello world!'


def symlink_parity_scenario(drive, workspace):
    with workspace.fixture() as fixture, drive.bound(fixture.target):
        assert_same_file(fixture.directory, drive.root)
        target = drive.path('test.txt')
        write_text(target, CONTENTS)
        assert_content(target, CONTENTS)

        link = drive.path('link')
        create_symlink(link, target)
        assert_true(f'{link} is a symbolic link', path_attributes(link).is_symlink)
        assert_content(link, CONTENTS)
        #Same link seen from the real directory
        assert_content(fixture.path('link'), CONTENTS)

        link_attributes = dataclasses.replace(path_attributes(link), is_symlink=False)
        assert_equivalent(path_attributes(target), link_attributes, 'link and target attributes')
