import dataclasses
import os
from typing import Any, List, Tuple

from .errors import EquivalenceError
from .file_operations import filesystem_operation, read_text


def diff(left: Any, right: Any, prefix: str = '') -> List[Tuple[str, Any, Any]]:
    """
    Compare two snapshot records field by field.

    Nested dataclasses are compared recursively so the reported field names
    point at the exact property that diverged, e.g. `attributes.hidden`.
    """
    if dataclasses.is_dataclass(left) and type(left) is type(right):
        divergences = []
        for field in dataclasses.fields(left):
            name = f'{prefix}{field.name}'
            divergences.extend(diff(getattr(left, field.name), getattr(right, field.name), name + '.'))
        return divergences
    if left != right:
        return [(prefix.rstrip('.') or 'value', left, right)]
    return []


def assert_equivalent(real: Any, virtual: Any, what: str) -> None:
    divergences = diff(real, virtual)
    if divergences:
        raise EquivalenceError(what, divergences)


def assert_equal(what: str, real: Any, virtual: Any) -> None:
    if real != virtual:
        raise EquivalenceError(what, [(what, real, virtual)])


def assert_same_file(real: str, virtual: str) -> None:
    with filesystem_operation('same file check', virtual):
        same = os.path.samefile(real, virtual)
    if not same:
        raise EquivalenceError(f'{real} and {virtual}', [('same file', True, False)])


def assert_exists(path: str) -> None:
    if not os.path.exists(path):
        raise EquivalenceError(path, [('exists', True, False)])


def assert_absent(path: str) -> None:
    if os.path.lexists(path):
        raise EquivalenceError(path, [('exists', False, True)])


def assert_content(path: str, expected: str) -> None:
    actual = read_text(path)
    if actual != expected:
        raise EquivalenceError(f'content of {path}', [('content', expected, actual)])


def assert_true(what: str, value: bool) -> None:
    if not value:
        raise EquivalenceError(what, [(what, True, value)])
