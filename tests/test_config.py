from __future__ import annotations

import os

import dotenv

from eventreg import config


def test_config_uses_python_dotenv():
    assert config.load_dotenv is dotenv.load_dotenv


def test_load_env_reads_cwd_dotenv(monkeypatch, tmp_path):
    monkeypatch.setenv("EVENTREG_TEST_FLAG", "unset")
    monkeypatch.delenv("EVENTREG_TEST_FLAG")
    monkeypatch.setattr(config, "REPO_ROOT", tmp_path / "no-repo")
    (tmp_path / ".env").write_text("EVENTREG_TEST_FLAG=from-cwd\n")
    monkeypatch.chdir(tmp_path)

    config.load_env()
    assert os.environ["EVENTREG_TEST_FLAG"] == "from-cwd"


def test_repo_root_dotenv_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("EVENTREG_TEST_FLAG", "from-shell")
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".env").write_text("EVENTREG_TEST_FLAG=from-repo\n")
    monkeypatch.setattr(config, "REPO_ROOT", repo)
    monkeypatch.chdir(tmp_path)

    config.load_env()
    assert os.environ["EVENTREG_TEST_FLAG"] == "from-repo"
