class PrebuildError(Exception):
    """Base exception for all application-specific errors."""

    pass


# --- 1. Errors related to manifests and cache configuration ---
class ConfigurationError(PrebuildError):
    """Base class for malformed configuration, such as an invalid exclusion pattern."""

    pass


class ManifestMissingError(ConfigurationError):
    """Raised when a package manifest (package.json) cannot be found."""

    pass


class ManifestParsingError(ConfigurationError):
    """Raised when a package manifest is not valid JSON."""

    pass


class ManifestValidationError(ConfigurationError):
    """Raised when the `prebuild` section fails structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors that occur while reading or writing the cache ---
class StorageError(PrebuildError):
    """Base class for filesystem failures while writing metadata or removing cache roots."""

    pass


class PathExistsError(StorageError):
    """Raised when a file or directory already exists."""

    pass


class PathNotFoundError(StorageError):
    """Raised when a file or directory is not found."""

    pass


class NotAFileError(StorageError):
    """Raised when a file is expected, but a directory is found."""

    pass


class NotADirectoryStorageError(StorageError):
    """Raised when a directory is expected, but a file is found."""

    pass


class ClearError(StorageError):
    """Raised when one or more cache roots could not be removed."""

    def __init__(self, message: str, failures: list | None = None):
        super().__init__(message)
        self.failures = failures or []
