from dataclasses import dataclass
from typing import Callable, FrozenSet

from .create_and_delete_file_scenario import create_and_delete_file_scenario
from .delete_restore_file_scenario import delete_restore_file_scenario
from .delete_drive_root_scenario import delete_drive_root_scenario
from .metadata_parity_scenario import metadata_parity_scenario
from .store_parity_scenario import store_parity_scenario
from .hidden_attribute_parity_scenario import hidden_attribute_parity_scenario
from .owner_parity_scenario import owner_parity_scenario
from .symlink_parity_scenario import symlink_parity_scenario
from .mapping_over_symlink_scenario import mapping_over_symlink_scenario
from .copy_drive_root_scenario import copy_drive_root_scenario


@dataclass(frozen=True)
class Scenario:
    name: str
    run: Callable
    requires: FrozenSet[str] = frozenset()


# Run in this order, one at a time: they all share the single virtual drive
SCENARIOS = (
    Scenario('create_and_delete_file', create_and_delete_file_scenario),
    Scenario('delete_restore_file', delete_restore_file_scenario),
    Scenario('delete_drive_root', delete_drive_root_scenario, frozenset({'root_deletion'})),
    Scenario('metadata_parity', metadata_parity_scenario),
    Scenario('store_parity', store_parity_scenario),
    Scenario('hidden_attribute_parity', hidden_attribute_parity_scenario, frozenset({'hidden_attribute'})),
    Scenario('owner_parity', owner_parity_scenario),
    Scenario('symlink_parity', symlink_parity_scenario, frozenset({'symlinks'})),
    Scenario('mapping_over_symlink', mapping_over_symlink_scenario, frozenset({'symlinks'})),
    Scenario('copy_drive_root', copy_drive_root_scenario),
)

__all__ = [
    'Scenario',
    'SCENARIOS',
    'create_and_delete_file_scenario',
    'delete_restore_file_scenario',
    'delete_drive_root_scenario',
    'metadata_parity_scenario',
    'store_parity_scenario',
    'hidden_attribute_parity_scenario',
    'owner_parity_scenario',
    'symlink_parity_scenario',
    'mapping_over_symlink_scenario',
    'copy_drive_root_scenario',
]
