from pathlib import Path

from rustproxy import paths


def test_config_path_follows_cargo_home(cargo_home: Path):
    assert paths.cargo_home() == cargo_home
    assert paths.config_path() == cargo_home / "config.toml"


def test_default_cargo_home_is_under_user_home(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("CARGO_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert paths.config_path() == tmp_path / ".cargo" / "config.toml"


def test_blank_cargo_home_is_ignored(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("CARGO_HOME", "   ")
    monkeypatch.setenv("HOME", str(tmp_path))
    assert paths.cargo_home() == tmp_path / ".cargo"


def test_backup_path_is_sibling_with_backup_suffix(tmp_path: Path):
    assert paths.backup_path(tmp_path / "config.toml") == tmp_path / "config.backup"


def test_backup_path_never_equals_a_backup_named_config(tmp_path: Path):
    cfg = tmp_path / "cargo.backup"
    assert paths.backup_path(cfg) == tmp_path / "cargo.backup.backup"
