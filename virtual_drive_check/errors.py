from typing import Any


class CommandExecutionError(RuntimeError):
    """Raised when an external command exits nonzero and failure is not tolerated."""

    def __init__(self, result: Any) -> None:
        self.result = result
        super().__init__(f"Command failed to run: {result.command_line}, output:\n {result.output}")


class EquivalenceError(AssertionError):
    """A property observed through the real path and the virtual path diverged."""

    def __init__(self, what: str, divergences: list) -> None:
        self.what = what
        self.divergences = divergences
        details = ', '.join(f'{field}: {left!r} != {right!r}' for field, left, right in divergences)
        super().__init__(f"{what} differ ({details})")


class FilesystemOperationError(OSError):
    """Underlying file I/O failed for a reason unrelated to the mapping."""


class DriveInUseError(RuntimeError):
    """The virtual drive handle already holds a binding."""
