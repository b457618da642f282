import os

import pytest

from llmmina.semantic.context import (
    FilesystemContext,
    GitContext,
    RuntimeContext,
    SessionContext,
    SolanaContext,
)


@pytest.fixture
def isolated_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_gather_fills_current_dir(isolated_dir):
    ctx = RuntimeContext.gather()
    assert ctx.fs.current_dir != ""
    assert ctx.fs.current_dir == os.getcwd()


def test_gather_finds_project_root_marker(isolated_dir):
    project = isolated_dir / "project"
    nested = project / "src" / "deep"
    nested.mkdir(parents=True)
    (project / "package.json").write_text("{}")
    os.chdir(nested)
    ctx = RuntimeContext.gather()
    assert ctx.fs.project_root == str(project.resolve())


def test_gather_outside_repository(isolated_dir):
    ctx = RuntimeContext.gather()
    assert ctx.git.is_repo is False
    assert ctx.git.branch == ""
    assert ctx.git.remote_url is None


def test_gather_records_lang_preference(isolated_dir, monkeypatch):
    monkeypatch.setenv("LANG", "C.UTF-8")
    assert RuntimeContext.gather().session.preferences["lang"] == "C.UTF-8"
    monkeypatch.delenv("LANG")
    assert RuntimeContext.gather().session.preferences["lang"] == "en"


def test_with_solana_returns_attached_copy():
    ctx = RuntimeContext()
    attached = ctx.with_solana("http://localhost:8899")
    assert attached.solana.connected_endpoint == "http://localhost:8899"
    assert attached.solana.rpc_health == "unknown"
    assert ctx.solana.connected_endpoint == ""
    assert attached.fs == ctx.fs


def test_default_context_is_empty():
    ctx = RuntimeContext()
    assert ctx.fs == FilesystemContext()
    assert ctx.git == GitContext()
    assert ctx.solana == SolanaContext()
    assert ctx.session == SessionContext()
    assert ctx.session.preferences == {}
    assert ctx.solana.current_slot is None