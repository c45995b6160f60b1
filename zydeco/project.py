"""Project configuration and opening a project or single file."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from os import PathLike

from .errors import PathNotFound, ProjectInvalid, ProjectNameMismatch

CONFIG_FILE = "Zydeco.toml"


class ProjectMode(Enum):
    """How imports in source files are located."""

    MANAGED = "managed"
    """Imports are rooted at the directory holding ``Zydeco.toml``."""
    ROOT = "root"
    """Imports are rooted at the directory of the file being run."""
    ROOT_NO_STD = "root_no_std"
    """Like ``ROOT``, without the standard library."""

    @classmethod
    def from_name(cls, mode: str) -> ProjectMode:
        """Parse ``managed``, ``root`` or ``root_no_std``."""
        try:
            return cls(mode)
        except ValueError:
            raise ProjectInvalid() from None


_CONFIG_MODES = {
    "Managed": ProjectMode.MANAGED,
    "Root": ProjectMode.ROOT,
    "RootNoStd": ProjectMode.ROOT_NO_STD,
}


@dataclass(frozen=True)
class Config:
    name: str
    mode: ProjectMode
    deps: tuple[str, ...] = ()


@dataclass
class Package:
    """A project or single file opened for loading."""

    name: str
    root: Path | None = None
    cache: Path | None = None
    mode: ProjectMode = ProjectMode.ROOT
    deps: dict[str, Package | None] = field(default_factory=dict)


@dataclass(frozen=True)
class FileLoc:
    path: Path

    def __str__(self) -> str:
        return str(self.path)


def load_config(path: str | PathLike[str]) -> Config:
    """Read a ``Zydeco.toml`` file."""
    with open(path, "rb") as handle:
        data = tomllib.load(handle)
    try:
        name, mode, deps = data["name"], data["mode"], data["deps"]
    except KeyError as exc:
        raise ValueError(f"missing field {exc.args[0]!r} in {path}") from None
    if not isinstance(name, str) or not isinstance(mode, str):
        raise ValueError(f"invalid project configuration in {path}")
    if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
        raise ValueError(f"`deps` must be a list of strings in {path}")
    parsed_mode = _CONFIG_MODES.get(mode) or ProjectMode.from_name(mode)
    return Config(name, parsed_mode, tuple(deps))


def open_package(path: str | PathLike[str]) -> Package:
    """Open a project directory (with ``Zydeco.toml``) or a single source file."""
    path = Path(path)
    project_name = path.name
    if not path.exists():
        raise PathNotFound(path)
    if path.is_dir():
        try:
            config = load_config(path / CONFIG_FILE)
        except OSError:
            raise PathNotFound(path) from None
        if project_name != config.name:
            raise ProjectNameMismatch(project_name, config.name)
        return Package(
            name=config.name,
            root=path,
            mode=config.mode,
            deps={dep: None for dep in config.deps},
        )
    return Package(name=project_name, root=path, mode=ProjectMode.ROOT)