"""Locating module files on disk and naming modules by their paths."""

from __future__ import annotations

import os
from collections.abc import Iterator
from os import PathLike
from pathlib import Path

from .project import FileLoc

_SOURCE_SUFFIXES = (".zydeco", ".zy")
_MODULE_FILE = "Module.zy"


def _walk(root: Path) -> Iterator[Path]:
    """Yield ``root`` and everything below it, depth first, in name order.

    Symbolic links below the root are not followed, and entries that
    cannot be read are skipped.
    """
    yield root
    try:
        if not root.is_dir():
            return
        children = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError:
        return
    for child in children:
        if child.is_symlink():
            yield child
            continue
        yield from _walk(child)


def _ends_with(path: Path, *parts: str) -> bool:
    return path.parts[-len(parts):] == parts


def create_all_name(path: str | PathLike[str]) -> set[str]:
    """Collect the module names defined by the source files under ``path``.

    ``src/Module.zy`` names the project itself, any other ``Module.zy`` names
    its directory, and every other source file names itself.
    """
    root = Path(path)
    project_name = root.name
    names: set[str] = set()
    for entry in _walk(root):
        if entry.suffix not in _SOURCE_SUFFIXES:
            continue
        if _ends_with(entry, "src", _MODULE_FILE):
            names.add(project_name)
        elif _ends_with(entry, _MODULE_FILE):
            names.add(entry.parent.stem)
        else:
            names.add(entry.stem)
    return names


def find_mod_file(name: str, path: str | PathLike[str]) -> FileLoc | None:
    """Find the file of module ``name`` under ``path``.

    A file ``name.zydeco`` or ``name.zy`` is the module itself; a directory
    ``name`` stands for the ``Module.zy`` inside it. The first match in a
    depth-first walk wins; None if nothing matches.
    """
    candidates = {name + suffix for suffix in _SOURCE_SUFFIXES}
    for entry in _walk(Path(path)):
        if entry.name in candidates:
            return FileLoc(entry)
        if entry.name == name:
            return FileLoc(entry / _MODULE_FILE)
    return None


def _segments(mod_path: str | PathLike[str]) -> list[str]:
    text = os.fspath(mod_path)
    if os.sep != "/":
        text = text.replace(os.sep, "/")
    return text.split("/")


def _prefixed(project_name: str, segments: list[str], is_std: bool) -> list[str]:
    prefix = [project_name, "Std"] if is_std else [project_name]
    return prefix + segments


def module_path_of_file(
    project_name: str, mod_path: str | PathLike[str], is_std: bool
) -> list[str]:
    """Module path of a source file, from its path relative to the project."""
    text = "/".join(_segments(mod_path))
    text = text.replace(".zydeco", "").replace(".zy", "")
    return _prefixed(project_name, text.split("/"), is_std)


def module_path_of_folder(
    project_name: str, mod_path: str | PathLike[str], is_std: bool
) -> list[str]:
    """Module path of a module directory, from the path of its ``Module.zy``."""
    segments = _segments(mod_path)
    segments.pop()
    return _prefixed(project_name, segments, is_std)