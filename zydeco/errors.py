"""Errors reported while loading a project from disk."""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike


def _debug_str(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class SurfaceError(Exception):
    """Base class of every project-loading error."""


class PathNotFound(SurfaceError):
    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = path
        super().__init__(f"Path not found: `{path}`")


class PathInvalid(SurfaceError):
    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = path
        super().__init__(f"Path invalid: `{path}`")


class ProjectInvalid(SurfaceError):
    def __init__(self) -> None:
        super().__init__(
            "Invalid project setting; valid options are `managed`, `root` or `root_no_std`"
        )


class ProjectNameMismatch(SurfaceError):
    def __init__(self, name: str, config_name: str) -> None:
        self.name = name
        self.config_name = config_name
        super().__init__(f"Project name mismatch: `{name}` != `{config_name}`")


class ParseError(SurfaceError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Parse error:\n{message}")


class ResolveErrors(SurfaceError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Resolve errors:\n{message}")


class ModuleNotFound(SurfaceError):
    def __init__(self, mod_name: Sequence[str], path: str | PathLike[str]) -> None:
        self.mod_name = list(mod_name)
        self.path = path
        names = "[" + ", ".join(_debug_str(n) for n in self.mod_name) + "]"
        super().__init__(f"Module not found: `{names}` in file: {path}")