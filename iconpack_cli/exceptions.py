"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class IconPackError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(IconPackError):
    """Raised for issues related to configuration loading or validation."""


class ConfigMissingError(IconPackError):
    """Raised when the pack manifest (config.json) does not exist."""


class ConfigInvalidError(IconPackError):
    """Raised when the pack manifest cannot be parsed or is not a JSON array."""


class PackEntryInvalidError(IconPackError):
    """Raised for a single manifest entry that is incomplete or points nowhere."""


class MappingFileUnreadableError(IconPackError):
    """Raised when a pack mapping file is missing or cannot be read."""


class MappingInvalidError(IconPackError):
    """Raised when a pack mapping file is not a JSON object of strings."""


class MappingEmptyError(IconPackError):
    """Raised when a pack mapping contains no icons. Nothing to do."""


class MalformedIconSpecError(IconPackError):
    """Raised when a remote icon spec is not of the form 'prefix-rest'."""


class FetchFailedError(IconPackError):
    """Raised when an icon could not be fetched from the remote API."""


class EmptyResponseBodyError(FetchFailedError):
    """Raised when the remote API answered successfully but with no content."""


class WriteFailedError(IconPackError):
    """Raised when a downloaded icon cannot be written to the icons directory."""


class UserCancelledError(IconPackError):
    """
    Names a user abort in the error taxonomy. Not raised: a cancelled apply is
    reported as an outcome with the CANCELLED state.
    """


class NoBackupFoundError(IconPackError):
    """
    Names a restore without backup in the error taxonomy. Not raised: the
    restore reports it as `RestoreResult.NO_BACKUP_FOUND`.
    """


class OperationInProgressError(IconPackError):
    """Raised when an apply or restore is triggered while another one is running."""


class BackupFailedError(IconPackError):
    """Raised when the original icons could not be snapshotted before an apply."""


class SettingsWriteError(IconPackError):
    """Raised when the persisted settings (such as the active pack) cannot be saved."""
