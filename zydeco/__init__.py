"""Stack-machine runtime, primitive library, CPS transform and project tooling for Zydeco."""

__version__ = "0.2.0"

__all__ = [
    "builtins",
    "cps",
    "deps",
    "errors",
    "eval",
    "modules",
    "project",
    "syntax",
]