"""Shared fixtures: throwaway git repositories cloned over file:// URLs."""

import pytest
from git import Repo


def _init_repo(path):
    repo = Repo.init(path)
    repo.config_writer().set_value("user", "name", "Tester").release()
    repo.config_writer().set_value("user", "email", "tester@example.com").release()
    return repo


@pytest.fixture
def source_repo(tmp_path):
    """A committed repository with one Python file."""
    repo_dir = tmp_path / "source_repo"
    repo_dir.mkdir()
    repo = _init_repo(repo_dir)

    (repo_dir / "main.py").write_text(
        "# entry point\nx = 1\n\ndef f():\n    return x\n",
        encoding="utf-8",
    )
    repo.git.add("--all")
    repo.index.commit("Initial commit")
    return repo_dir


@pytest.fixture
def empty_repo(tmp_path):
    """A repository without commits."""
    repo_dir = tmp_path / "empty_repo"
    repo_dir.mkdir()
    _init_repo(repo_dir)
    return repo_dir


@pytest.fixture
def workspace_parent(tmp_path):
    """Parent directory for pipeline workspaces, so leftovers can be inspected."""
    parent = tmp_path / "workspaces"
    parent.mkdir()
    return parent
