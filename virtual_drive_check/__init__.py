from .main import EquivalenceRunner, cli, run_equivalence_checks, select_scenarios
from .commands import CommandResult, run_command
from .errors import CommandExecutionError, DriveInUseError, EquivalenceError, FilesystemOperationError
from .mapping import BindMountBackend, SubstBackend, VirtualDrive
from .scenarios import SCENARIOS, Scenario
from .workspace import ScenarioFixture, TempWorkspace

__all__ = [
    'EquivalenceRunner',
    'cli',
    'run_equivalence_checks',
    'select_scenarios',
    'CommandResult',
    'run_command',
    'CommandExecutionError',
    'DriveInUseError',
    'EquivalenceError',
    'FilesystemOperationError',
    'BindMountBackend',
    'SubstBackend',
    'VirtualDrive',
    'SCENARIOS',
    'Scenario',
    'ScenarioFixture',
    'TempWorkspace',
]
