from typing import Sequence


class MigManagerError(Exception):
    """Base class for errors that abort a reconciliation pass."""

    pass


class CommandExecutionError(MigManagerError):
    """Raised when a command cannot be launched."""

    def __init__(self, command: Sequence[str], source: OSError):
        self.command = list(command)
        self.source = source
        super().__init__(f"Failed to execute '{' '.join(self.command)}': {source}")


class CommandFailedError(MigManagerError):
    """Raised when a command exits with a non-zero status."""

    def __init__(self, bin_path: str, returncode: int, stderr: str):
        self.bin_path = bin_path
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"'{bin_path}' failed - stderr: {stderr}")


class LoggerSetupError(MigManagerError):
    """Raised when logging cannot be configured."""

    def __init__(self, source: Exception):
        self.source = source
        super().__init__(f"Logger setup error: {source}")


class InvalidLogLevelError(MigManagerError):
    """Raised for an unrecognised --log-level value."""

    def __init__(self, log_level: str):
        self.log_level = log_level
        super().__init__(f"Invalid log level '{log_level}'")


class UsageError(MigManagerError):
    """Raised for malformed command line arguments."""

    pass


class ConfigError(MigManagerError):
    """Raised when the config file cannot be loaded."""

    pass
