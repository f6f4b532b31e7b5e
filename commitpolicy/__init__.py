"""commitpolicy - conventional commit message policy and linter."""

__version__ = "0.1.0"
