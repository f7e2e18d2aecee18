"""Cache key derivation."""

import dataclasses
import hashlib
import json
import logging
import os
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel

from ..datacls import Addon

logger = logging.getLogger(__name__)


def normalize_browsers(browsers: List[str]) -> List[str]:
    """Lower-case and sort a browser target list."""
    return sorted(str(browser).lower() for browser in browsers)


def normalize_targets(targets: Dict[str, Any]) -> Dict[str, Any]:
    """Project targets with the browser list in canonical form."""
    normalized = dict(targets)
    normalized["browsers"] = normalize_browsers(targets["browsers"])
    return normalized


def key_parts(addon: Addon) -> List[Any]:
    """The build-relevant state of an addon, in hashing order."""
    return [
        sorted(addon.pkg.keys()),
        addon.name,
        addon.options.resolved_babel(),
        addon.options.ember_cli_babel,
        normalize_browsers(addon.project.targets["browsers"]),
    ]


def encode_extra(value: Any) -> Any:
    """Encode the content of values `json` cannot serialize on its own."""
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=canonical_json)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if callable(value):
        return f"<callable {getattr(value, '__module__', '')}.{getattr(value, '__qualname__', type(value).__qualname__)}>"
    # opaque objects have no stable content to hash
    raise TypeError(f"Cannot encode value of type '{type(value).__qualname__}' into a cache key")


def canonical_json(value: Any) -> str:
    """Serialize with recursively sorted keys and no insignificant whitespace."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=encode_extra)


def derive_key(addon: Addon) -> str:
    """
    Compute the cache key of an addon.

    The key only changes when the manifest key set, the name, the resolved
    babel options, the companion babel settings or the target browsers change.
    Browser order and case do not matter.
    """
    digest = hashlib.sha256(canonical_json(key_parts(addon)).encode("utf-8")).hexdigest()
    logger.debug(f"Cache key for addon '{addon.name}': {digest}")
    return digest
