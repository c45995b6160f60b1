from pathlib import Path

import pytest

from zydeco.errors import PathNotFound, ProjectInvalid, ProjectNameMismatch
from zydeco.project import (
    Config,
    FileLoc,
    Package,
    ProjectMode,
    load_config,
    open_package,
)


@pytest.mark.parametrize(
    "name, mode",
    [
        ("managed", ProjectMode.MANAGED),
        ("root", ProjectMode.ROOT),
        ("root_no_std", ProjectMode.ROOT_NO_STD),
    ],
)
def test_mode_from_name(name, mode):
    assert ProjectMode.from_name(name) is mode


@pytest.mark.parametrize("name", ["Managed", "", "rootnostd"])
def test_mode_from_name_invalid(name):
    with pytest.raises(ProjectInvalid):
        ProjectMode.from_name(name)


def test_package_default_mode_is_root():
    assert Package("x").mode is ProjectMode.ROOT


def test_fileloc_str():
    assert str(FileLoc(Path("a") / "b.zy")) == str(Path("a") / "b.zy")


def _write_config(directory: Path, name: str, mode: str, deps: list[str]) -> None:
    deps_text = ", ".join(f'"{d}"' for d in deps)
    (directory / "Zydeco.toml").write_text(
        f'name = "{name}"\nmode = "{mode}"\ndeps = [{deps_text}]\n'
    )


def test_load_config(tmp_path):
    _write_config(tmp_path, "Proj", "Managed", ["Std", "Extra"])
    config = load_config(tmp_path / "Zydeco.toml")
    assert config == Config("Proj", ProjectMode.MANAGED, ("Std", "Extra"))


def test_load_config_accepts_lowercase_mode(tmp_path):
    _write_config(tmp_path, "Proj", "root_no_std", [])
    assert load_config(tmp_path / "Zydeco.toml").mode is ProjectMode.ROOT_NO_STD


def test_load_config_bad_mode(tmp_path):
    _write_config(tmp_path, "Proj", "Weird", [])
    with pytest.raises(ProjectInvalid):
        load_config(tmp_path / "Zydeco.toml")


def test_load_config_missing_field(tmp_path):
    (tmp_path / "Zydeco.toml").write_text('name = "Proj"\n')
    with pytest.raises(ValueError):
        load_config(tmp_path / "Zydeco.toml")


def test_open_single_file(tmp_path):
    source = tmp_path / "main.zy"
    source.write_text("ret 1")
    package = open_package(source)
    assert package.name == "main.zy"
    assert package.root == source
    assert package.mode is ProjectMode.ROOT
    assert package.deps == {}


def test_open_project_directory(tmp_path):
    project = tmp_path / "Proj"
    project.mkdir()
    _write_config(project, "Proj", "Managed", ["Std"])
    package = open_package(project)
    assert package.name == "Proj"
    assert package.root == project
    assert package.mode is ProjectMode.MANAGED
    assert package.deps == {"Std": None}


def test_open_project_name_mismatch(tmp_path):
    project = tmp_path / "Proj"
    project.mkdir()
    _write_config(project, "Other", "Root", [])
    with pytest.raises(ProjectNameMismatch) as info:
        open_package(project)
    assert (info.value.name, info.value.config_name) == ("Proj", "Other")


def test_open_missing_path(tmp_path):
    with pytest.raises(PathNotFound):
        open_package(tmp_path / "absent.zy")


def test_open_directory_without_config(tmp_path):
    project = tmp_path / "Proj"
    project.mkdir()
    with pytest.raises(PathNotFound) as info:
        open_package(project)
    assert info.value.path == project