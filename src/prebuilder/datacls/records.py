from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .. import constants


class UsageSummaryEntry(BaseModel):
    """
        Class represents the last cache decision taken for one cache key
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str
    prebuild_path: str = Field(alias="prebuildPath")
    tree_type: str = Field(alias="treeType")
    using_prebuild: bool = Field(alias="usingPrebuild")


class MetadataRecord(BaseModel):
    """
        Class represents the side-car metadata written next to a cache entry
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str
    babel_options: Any = Field(None, alias="babelOptions")
    companion_options: Optional[Dict[str, Any]] = Field(None, alias=f"options.{constants.COMPANION_OPTION}")
    targets: Dict[str, Any] = Field(default_factory=dict)


class StorePlan(BaseModel):
    """
        Class represents where and how a produced tree will be stored
    """
    model_config = ConfigDict(frozen=True)

    addon_name: str
    tree_type: str
    cache_key: str
    store_path: str
    metadata_path: str
    metadata: MetadataRecord


class ClearResult(BaseModel):
    """
        Class represents one cache root handled by the clear command
    """
    path: str
    existed: bool
