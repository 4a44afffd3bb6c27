import ctypes
import logging
import os
from typing import Any, Optional, Union

from appdirs import user_log_dir
from syslog2 import SysLogHandler


def is_admin():
    try:
        # Unix-based systems
        return os.getuid() == 0
    except AttributeError:
        # Windows
        return ctypes.windll.shell32.IsUserAnAdmin() != 0 # type: ignore


def default_log_file() -> str:
    log_dir = user_log_dir("VirtualDriveCheck")
    os.makedirs(log_dir, exist_ok=True)
    return os.path.join(log_dir, 'virtual_drive_check.log')


class LoggingMixIn:
    """Mixin for logging scenario runs."""

    def __init__(self, enable: bool, log_in_file: Union[str, bool, None], log_in_console: bool, log_in_syslog: bool) -> None:

        self.log: logging.Logger = logging.getLogger('virtual_drive_check')
        self.log.setLevel(logging.DEBUG)
        # Handlers of a previous run in the same process would duplicate every line
        for handler in list(self.log.handlers):
            self.log.removeHandler(handler)
            handler.close()
        if not enable:
            self.log.addHandler(logging.NullHandler())
            return
        log_format = logging.Formatter('%(asctime)s %(levelname)s - %(message)s')

        if log_in_syslog:
            #If user is not windows admin, the windows event log will refuse us
            if not is_admin() and os.name == 'nt':
                log_in_console = True
                self.log.error("You are not an administrator, syslog in windows event log will not work")
            else:
                syslog_handler = SysLogHandler(program=self.log.name)
                syslog_handler.setFormatter(log_format)
                self.log.addHandler(syslog_handler)

        if log_in_file:
            file_handler = logging.FileHandler(default_log_file() if log_in_file is True else log_in_file)
            file_handler.setFormatter(log_format)
            self.log.addHandler(file_handler)

        if log_in_console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(log_format)
            self.log.addHandler(console_handler)

    def __call__(self, scenario: Any, *args: Any) -> Any:
        """
        Run the given scenario with logging.

        Args:
            scenario (Scenario): The scenario to run.
            *args: Arguments passed to the scenario.

        Returns:
            Any: Scenario result.

        Raises:
            AssertionError: If an equivalence did not hold.
            OSError: If an OSError occurred.
        """
        ret: Optional[str] = '[Unhandled Exception]'
        try:
            ret = scenario.run(*args)
            return ret
        except (AssertionError, OSError) as e:
            ret = str(e)
            raise
        finally:
            self.log.debug('%s(%s) => %s', scenario.name, repr(args), ret)
