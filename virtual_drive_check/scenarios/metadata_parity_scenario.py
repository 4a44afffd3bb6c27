import os

from ..assertions import assert_equivalent, assert_same_file, assert_true
from ..attributes import path_attributes, snapshot
from ..file_operations import create_directory, write_text


def metadata_parity_scenario(drive, workspace):
    with workspace.fixture() as fixture, drive.bound(fixture.target):
        assert_same_file(fixture.directory, drive.root)
        assert_equivalent(path_attributes(fixture.directory), path_attributes(drive.root), 'directory attributes')
        assert_true(f'{drive.root} writable', os.access(drive.root, os.W_OK))

        virtual_file = drive.path('metadata.txt')
        real_file = fixture.path('metadata.txt')
        write_text(virtual_file, 'metadata')
        assert_same_file(real_file, virtual_file)
        assert_equivalent(snapshot(real_file), snapshot(virtual_file), 'file attributes')

        real_dir = fixture.path('nested')
        create_directory(real_dir)
        assert_equivalent(path_attributes(real_dir), path_attributes(drive.path('nested')), 'nested directory attributes')
