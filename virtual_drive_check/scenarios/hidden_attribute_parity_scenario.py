from ..assertions import assert_equal, assert_equivalent, assert_same_file
from ..attributes import basic_attributes, is_hidden, set_hidden
from ..file_operations import write_text


def _assert_hidden(expected, *paths):
    for path in paths:
        assert_equal(f'hidden flag of {path}', expected, is_hidden(path))


def hidden_attribute_parity_scenario(drive, workspace):
    """
    The hidden attribute set through either path is seen through both.

    Directory first (the drive root), then a file inside it. Every flag is
    cleared again at the end and must read back as it started.
    """
    with workspace.fixture() as fixture, drive.bound(fixture.target):
        assert_same_file(fixture.directory, drive.root)
        initially_hidden = is_hidden(fixture.directory)

        set_hidden(drive.root, True)
        _assert_hidden(True, drive.root, fixture.directory)
        set_hidden(fixture.directory, False)
        _assert_hidden(False, drive.root, fixture.directory)
        assert_equivalent(basic_attributes(fixture.directory), basic_attributes(drive.root), 'directory attributes')

        virtual_file = drive.path('hidden.txt')
        real_file = fixture.path('hidden.txt')
        write_text(real_file, 'hidden')
        set_hidden(real_file, True)
        _assert_hidden(True, virtual_file, real_file)
        set_hidden(virtual_file, False)
        _assert_hidden(False, virtual_file, real_file)
        assert_equivalent(basic_attributes(real_file), basic_attributes(virtual_file), 'file attributes')

        assert_equal('hidden flag after restore', initially_hidden, is_hidden(fixture.directory))
