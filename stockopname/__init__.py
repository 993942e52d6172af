"""Stock opname (physical inventory count) service."""

__version__ = "1.0.0"
