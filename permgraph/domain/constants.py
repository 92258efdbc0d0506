"""Domain constants shared by configuration and the application layer."""

# Conventional precedence within a module: permission type -> types it requires.
DEFAULT_PRECEDENCE_POLICY: dict[str, tuple[str, ...]] = {
    "view": (),
    "create": ("view",),
    "edit": ("view",),
    "delete": ("edit",),
    "manage": ("view", "create", "edit", "delete"),
}

# Permissions with at least this many dependencies or dependents count as "complex".
COMPLEX_PERMISSION_THRESHOLD = 3
COMPLEX_PERMISSION_LIMIT = 10
