import json
import logging
import os
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from . import constants
from .io import FileSystem, DiskFileSystem, PathLike
from .exceptions import (
    ConfigurationError,
    ManifestMissingError,
    ManifestParsingError,
    ManifestValidationError,
)


logger = logging.getLogger(__name__)


class PrebuildSettings(BaseModel):
    """
        Class Config-Validation Model describe the `prebuild` section of a manifest
    """
    base_path: Optional[str] = Field(None, alias=constants.BASE_PATH_KEY)
    exclude_addons: Optional[Union[str, List[str]]] = Field(None, alias=constants.EXCLUDE_ADDONS_KEY)
    # trees the build command handles for this package
    trees: Optional[List[str]] = Field(None, alias=constants.TREES_KEY)
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("base_path", mode="before")
    @classmethod
    def normalize_base_path(cls, value: Any) -> Optional[str]:
        """An empty base path means no base path"""
        if value in (None, ""):
            return None
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value

    @model_validator(mode="after")
    def check_exclude_addons(self) -> "PrebuildSettings":
        """Empty exclusion entries would match nothing and hide typos"""
        if isinstance(self.exclude_addons, list) and any(not item for item in self.exclude_addons):
            raise ConfigurationError(
                f"'{constants.EXCLUDE_ADDONS_KEY}' must not contain empty entries, got {self.exclude_addons}."
            )
        return self

    @field_validator("trees", mode="before")
    @classmethod
    def split_trees(cls, value: Any) -> Any:
        """Trees may be given as a comma separated string"""
        if isinstance(value, str):
            return parse_tree_list(value)
        return value

    def exclusion_patterns(self) -> List[str]:
        if not self.exclude_addons:
            return []
        if isinstance(self.exclude_addons, str):
            return [self.exclude_addons]
        return list(self.exclude_addons)

    @classmethod
    def from_manifest(cls, pkg: Optional[Dict[str, Any]]) -> "PrebuildSettings":
        """
        Validate the `prebuild` section of a parsed manifest.

        Raises:
            ManifestValidationError: if the section is not structurally valid
        """
        section = (pkg or {}).get(constants.PREBUILD_SECTION) or {}
        if not isinstance(section, dict):
            raise ManifestValidationError(
                f"'{constants.PREBUILD_SECTION}' must be an object, got {type(section).__name__}."
            )
        try:
            return cls.model_validate(section)
        except ValidationError as e:
            raise ManifestValidationError(f"Invalid '{constants.PREBUILD_SECTION}' section:\n{e}") from e


def parse_tree_list(value: str) -> List[str]:
    """Split 'addon,templates' into tree names"""
    return [part.strip() for part in value.split(",") if part.strip()]


def env_exclusion_patterns() -> List[str]:
    """
    Exclusion patterns provided through the EXCLUDEADDONS environment variable,
    either a JSON array or a comma separated list.
    """
    raw = os.environ.get(constants.EXCLUDE_ADDONS_ENV, "").strip()
    if not raw:
        return []
    if raw.startswith("["):
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"{constants.EXCLUDE_ADDONS_ENV} is not a valid JSON array: {e}") from e
        if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
            raise ConfigurationError(f"{constants.EXCLUDE_ADDONS_ENV} must be a JSON array of strings.")
        return items
    return [part.strip() for part in raw.split(",") if part.strip()]


def load_manifest(root: PathLike, fs: Optional[FileSystem] = None) -> Dict[str, Any]:
    """
    Read and parse `<root>/package.json`.

    Raises:
        ManifestMissingError: if the manifest does not exist
        ManifestParsingError: if it is not a JSON object
    """
    fs = fs or DiskFileSystem()
    path = os.path.join(os.fspath(root), constants.MANIFEST_FILENAME)
    if not fs.is_file(path):
        raise ManifestMissingError(f"Manifest not found at: {path}")
    try:
        data = json.loads(fs.read_text(path))
    except json.JSONDecodeError as e:
        raise ManifestParsingError(f"Error parsing manifest '{path}': {e}") from e
    if not isinstance(data, dict):
        raise ManifestParsingError(f"Manifest '{path}' must contain a JSON object.")
    logger.debug(f"Loaded manifest '{path}'")
    return data
