"""A small command interpreter with quoting, aliases, variables and builtins."""

__version__ = "0.1.0"
__all__ = [
    "builtins",
    "commands",
    "environ",
    "errors",
    "expand",
    "getline",
    "info",
    "path",
    "quote",
    "shell",
]