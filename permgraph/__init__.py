"""permgraph: permission dependency graph service for RBAC administration."""

__version__ = "1.0.0"
