"""Domain value objects for permissions.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

# Dot-namespaced machine key: segments of lowercase alphanumerics/underscores (e.g. users.view).
_PERMISSION_NAME_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)+$")
_TAG_RE = re.compile(r"^[a-z][a-z0-9_]*$")


@dataclass(frozen=True)
class PermissionName:
    """Value object for a permission's unique machine name.

    Names are 3-100 characters, at least two dot-separated segments,
    each lowercase alphanumeric with underscores (e.g. 'users.view',
    'reports.sales.export').
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Permission name must be a non-empty string")
        if len(self.value) < 3 or len(self.value) > 100:
            raise ValueError("Permission name must be 3-100 characters")
        if not _PERMISSION_NAME_RE.match(self.value):
            raise ValueError(
                "Permission name must be dot-namespaced lowercase segments "
                "(e.g., 'users.view', 'roles.edit')"
            )

    @property
    def namespace(self) -> str:
        """Everything before the last segment ('users' for 'users.view')."""
        return self.value.rsplit(".", 1)[0]


@dataclass(frozen=True)
class PermissionTag:
    """Value object for module and type tags (lowercase identifier, max 50 chars)."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or len(self.value) > 50:
            raise ValueError("Tag must be 1-50 characters")
        if not _TAG_RE.match(self.value):
            raise ValueError("Tag must be lowercase alphanumeric with underscores")
