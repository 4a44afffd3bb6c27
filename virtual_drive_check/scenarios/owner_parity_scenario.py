from ..assertions import assert_equal, assert_equivalent, assert_same_file
from ..attributes import owner_of, path_attributes, set_owner
from ..file_operations import write_text


def _rewrite_owner(written, other):
    owner = owner_of(other)
    set_owner(written, owner)
    assert_equal(f'owner of {written}', owner, owner_of(written))
    assert_equal(f'owner of {other}', owner, owner_of(other))


def owner_parity_scenario(drive, workspace):
    """
    The owner rewritten through one path reads back the same through both.

    The current owner is written back, so no privilege beyond owning the
    fixture is needed.
    """
    with workspace.fixture() as fixture, drive.bound(fixture.target):
        assert_same_file(fixture.directory, drive.root)
        _rewrite_owner(drive.root, fixture.directory)

        virtual_file = drive.path('owned.txt')
        real_file = fixture.path('owned.txt')
        write_text(virtual_file, 'owned')
        _rewrite_owner(real_file, virtual_file)
        _rewrite_owner(virtual_file, real_file)
        assert_equivalent(path_attributes(real_file), path_attributes(virtual_file), 'file attributes')
