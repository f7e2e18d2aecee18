from typing import Optional
import re

class Version:
    """
        Class describe a semantic version of a package dependency
    """
    # 1:Major, 2:Minor, 3:Patch, 4:Prerelease, 5:Build
    SEMVER_REGEX = re.compile(
        r"^(?P<major>0|[1-9]\d*)\."
        r"(?P<minor>0|[1-9]\d*)\."
        r"(?P<patch>0|[1-9]\d*)"
        r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
        r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
        r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
    )
    # first run of up to three dot separated numbers, not part of a longer number
    COERCE_REGEX = re.compile(r"(?:^|[^\d])(\d{1,16})(?:\.(\d{1,16}))?(?:\.(\d{1,16}))?(?:$|[^\d])")

    def __init__(self, version_str: str):
        self.version_str = version_str.strip()
        if self.version_str[:1] in ("v", "="):
            self.version_str = self.version_str[1:]

        if not self.SEMVER_REGEX.match(self.version_str):
            raise ValueError(f"Unrecognized Version '{version_str}'")

    @classmethod
    def coerce(cls, value) -> Optional["Version"]:
        """
        Pull the first version-looking number run out of `value`.

        '^1.2' -> 1.2.0, 'v3' -> 3.0.0, 'path' -> None.
        Missing minor/patch parts become 0, anything around the numbers is dropped.
        """
        if value is None:
            return None
        match = cls.COERCE_REGEX.search(str(value))
        if not match:
            return None
        major, minor, patch = (int(g) if g else 0 for g in match.groups())
        try:
            return cls(f"{major}.{minor}.{patch}")
        except ValueError:
            return None

    @classmethod
    def valid(cls, value) -> Optional["Version"]:
        """Parse `value` strictly, None when it is not a valid semantic version."""
        if isinstance(value, Version):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None

    def __str__(self):
        return self.version_str

    def __repr__(self):
        return f"Version('{self.version_str}')"
