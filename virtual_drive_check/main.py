#!/usr/bin/env python3

import argparse
import os
import re
import sys
import traceback
import warnings
from typing import Any, Dict, List, Optional, Sequence, Union

from globmatch import glob_match
with warnings.catch_warnings(action="ignore"):
    from str2type import str2type

from .attributes import supports_hidden_attribute
from .logging_mixin import LoggingMixIn
from .mapping import BACKENDS, VirtualDrive, default_backend, default_drive
from .scenarios import SCENARIOS, Scenario
from .workspace import TempWorkspace, can_create_symlinks


class EquivalenceRunner(LoggingMixIn):
    """
    Runs scenarios one after the other against a single virtual drive.

    The first failure stops the run. Whatever happened, the drive is released
    and the temp workspace deleted before `run()` returns.
    """

    def __init__(self, drive: VirtualDrive, scenarios: Sequence[Scenario], workspace_parent: Optional[str] = None,
                 debug: bool = False, log_in_file: Union[str, bool, None] = None, log_in_console: bool = True,
                 log_in_syslog: bool = False) -> None:
        LoggingMixIn.__init__(self, enable=debug, log_in_file=log_in_file, log_in_console=log_in_console, log_in_syslog=log_in_syslog)
        self.drive: VirtualDrive = drive
        self.scenarios: List[Scenario] = list(scenarios)
        self.workspace_parent: Optional[str] = workspace_parent
        self.workspace: Optional[TempWorkspace] = None
        self.skipped: List[str] = []

    def capabilities(self) -> frozenset:
        available = set(self.drive.capabilities)
        if supports_hidden_attribute():
            available.add('hidden_attribute')
        if can_create_symlinks(self.workspace.root):
            available.add('symlinks')
        return frozenset(available)

    def run(self) -> bool:
        succeeded = False
        try:
            self.workspace = TempWorkspace.create(self.workspace_parent)
            print(f"Test folder is at {self.workspace.root}", flush=True)
            available = self.capabilities()
            for scenario in self.scenarios:
                missing = scenario.requires - available
                if missing:
                    print(f"Skipping {scenario.name}, not supported here: {', '.join(sorted(missing))}", flush=True)
                    self.skipped.append(scenario.name)
                    continue
                self.log.info('Running %s on %r', scenario.name, self.drive)
                self(scenario, self.drive, self.workspace)
            succeeded = True
        except Exception:
            traceback.print_exc()
        finally:
            if not self.cleanup():
                succeeded = False
        status = "Tests succeeded" if succeeded else "Tests failed"
        if self.skipped:
            status += f" ({len(self.skipped)} skipped)"
        print(status, flush=True)
        return succeeded

    def cleanup(self) -> bool:
        """Release the drive, then delete the workspace. Both are always attempted."""
        clean = True
        self.drive.unbind()
        if self.drive.is_mapped():
            self.log.error('%s is still mapped after cleanup', self.drive.name)
            print(f"{self.drive.name} is still mapped", file=sys.stderr, flush=True)
            clean = False
        if self.workspace is not None:
            try:
                self.workspace.delete()
            except OSError as e:
                self.log.error('Could not delete %s: %s', self.workspace.root, e)
                print(f"Could not delete test folder {self.workspace.root}: {e}", file=sys.stderr, flush=True)
                clean = False
        return clean


def select_scenarios(patterns: Optional[List[str]] = None) -> List[Scenario]:
    """Scenarios whose name matches one of the glob patterns, in run order. All of them without patterns."""
    if not patterns:
        return list(SCENARIOS)
    selected = [scenario for scenario in SCENARIOS if glob_match(scenario.name, patterns)]
    if not selected:
        raise ValueError(f"No scenario matches {patterns}, known scenarios: {[s.name for s in SCENARIOS]}")
    return selected


def resolve_backend(backend: Any):
    if backend is None:
        return default_backend()
    if isinstance(backend, str):
        if backend not in BACKENDS:
            raise ValueError(f"backend must be one of {sorted(BACKENDS)}")
        return BACKENDS[backend]()
    return backend


def run_equivalence_checks(drive: Optional[str] = None, backend: Any = None, workspace_parent: Optional[str] = None,
                           scenarios: Optional[List[str]] = None, debug: bool = False,
                           log_in_file: Union[str, bool, None] = None, log_in_console: bool = True,
                           log_in_syslog: bool = False) -> bool:
    backend = resolve_backend(backend)
    selected = select_scenarios(scenarios)
    if workspace_parent is not None and not os.path.isdir(workspace_parent):
        raise ValueError(f"workspace_parent {workspace_parent} is not a directory")

    created_mountpoint: Optional[str] = None
    if drive is None:
        drive = default_drive()
        if os.name != 'nt':
            created_mountpoint = drive
    print("Virtual drive:", drive, flush=True)

    runner = EquivalenceRunner(VirtualDrive(drive, backend), selected, workspace_parent=workspace_parent, debug=debug,
                               log_in_file=log_in_file, log_in_console=log_in_console, log_in_syslog=log_in_syslog)
    try:
        return runner.run()
    finally:
        if created_mountpoint is not None and os.path.isdir(created_mountpoint) and not os.path.ismount(created_mountpoint):
            os.rmdir(created_mountpoint)


def parse_options(options: str) -> Dict[str, str]:
    """Parse options string with escaping"""
    options_dict: Dict[str, str] = {}
    for opt in re.split(r'(?<!\\),', options):
        key, value = re.split(r'(?<!\\)=', opt, maxsplit=1)
        options_dict[key] = value.replace('\\,', ',').replace('\\=', '=').replace('\\ ', ' ')
    return options_dict


def split_escaped(separator: str, value: str) -> List[str]:
    """Split a string on a separator, handling escaping"""
    return [part.replace(f'\\{separator}', separator) for part in re.split(rf'(?<!\\){separator}', value)]


def cli(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Check that a virtual drive behaves exactly like the directory it maps")
    parser.add_argument("drive", nargs="?", help="Drive letter (Windows) or mountpoint to use, picked automatically when omitted")
    parser.add_argument("-o", "--options", help="Options, e.g. debug=True,scenarios=*symlink*:copy_drive_root")
    args = parser.parse_args(argv)

    try:
        options: Dict[str, Any] = parse_options(args.options) if args.options else {}
        # Pass each options value to the right type using str2type() except for scenarios
        for key in options:
            if key != 'scenarios':
                options[key] = str2type(options[key], decode_escape=False)
        if 'scenarios' in options:
            options['scenarios'] = split_escaped(':', options['scenarios'])
        succeeded = run_equivalence_checks(args.drive, **options)
    except (TypeError, ValueError) as e:
        parser.error(str(e))
    sys.exit(0 if succeeded else 1)


if __name__ == "__main__":
    cli()
