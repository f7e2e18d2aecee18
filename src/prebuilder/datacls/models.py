"""
Prebuilder Project Models

The addon/project model the cache reads from. The surrounding build tool owns
these objects; the cache never mutates them.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import constants
from ..config import PrebuildSettings
from ..io import FileSystem, DiskFileSystem
from ..utils.paths import abspath
from .options import AddonOptions


class ProjectRole(str, Enum):
    APP = "app"
    ADDON = "addon"


class Consumer(BaseModel):
    """
        Class Model describe a package that declares an addon as dependency
    """
    pkg: Dict[str, Any] = Field(default_factory=dict)


class PackageInfo(BaseModel):
    """
        Class Model describe one package known to a project
    """
    name: str
    real_path: str
    pkg: Dict[str, Any] = Field(default_factory=dict)
    # name exported by the addon's entry point when it differs from pkg.name
    main_name: Optional[str] = None

    @field_validator("real_path", mode="before")
    @classmethod
    def absolute_path(cls, value: Any) -> str:
        return abspath(value)

    @property
    def addon_name(self) -> str:
        return self.main_name or self.name

    def is_addon(self) -> bool:
        keywords = self.pkg.get("keywords") or []
        return constants.ADDON_KEYWORD in keywords

    def nested_apps(self) -> List[str]:
        """App directories declared under `ember-addon.apps`"""
        section = self.pkg.get(constants.ADDON_SECTION)
        if not isinstance(section, dict):
            return []
        return [app for app in section.get(constants.NESTED_APPS_KEY) or [] if isinstance(app, str)]


class PackageInfoCache(BaseModel):
    """
        Class Model holding every package discovered for a project, keyed by real path
    """
    entries: Dict[str, PackageInfo] = Field(default_factory=dict)

    def add(self, info: PackageInfo) -> PackageInfo:
        return self.entries.setdefault(info.real_path, info)

    def __contains__(self, real_path: str) -> bool:
        return abspath(real_path) in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def values(self) -> List[PackageInfo]:
        return list(self.entries.values())


class Project(BaseModel):
    """
        Class Model describe the top-level project being built, an app or a reusable addon
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    root: str
    pkg: Dict[str, Any] = Field(default_factory=dict)
    targets: Dict[str, Any] = Field(default_factory=lambda: {"browsers": []})
    role: ProjectRole = ProjectRole.APP
    package_info_cache: PackageInfoCache = Field(default_factory=PackageInfoCache)
    fs: FileSystem = Field(default_factory=DiskFileSystem, exclude=True)

    @field_validator("root", mode="before")
    @classmethod
    def absolute_root(cls, value: Any) -> str:
        return abspath(value)

    def name(self) -> Optional[str]:
        return self.pkg.get("name")

    def is_addon(self) -> bool:
        return self.role == ProjectRole.ADDON

    @property
    def settings(self) -> PrebuildSettings:
        return PrebuildSettings.from_manifest(self.pkg)

    def initialize_addons(self) -> "Project":
        """Populate the package info cache from the project's node_modules"""
        from ..project import discover_packages
        discover_packages(self)
        return self


class Addon(BaseModel):
    """
        Class Model describe one buildable addon inside a project
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    root: str
    project: Project
    pkg: Dict[str, Any] = Field(default_factory=dict)
    options: AddonOptions = Field(default_factory=AddonOptions)
    parent: Optional[Consumer] = None
    developing: bool = False

    @field_validator("root", mode="before")
    @classmethod
    def absolute_root(cls, value: Any) -> str:
        return abspath(value)

    @field_validator("parent", mode="before")
    @classmethod
    def parent_from_project(cls, value: Any) -> Any:
        """A project can stand in as the consuming parent"""
        if isinstance(value, Project):
            return Consumer(pkg=value.pkg)
        return value

    @property
    def settings(self) -> PrebuildSettings:
        return PrebuildSettings.from_manifest(self.pkg)

    def is_developing_addon(self) -> bool:
        return self.developing
