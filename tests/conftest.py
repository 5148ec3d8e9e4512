import logging
from pathlib import Path

import pytest

from rustproxy.log import setup_logging_once
from tests.infrastructure.file_utils import write_toml


@pytest.fixture
def cargo_home(tmp_path: Path, monkeypatch) -> Path:
    """Изолированный CARGO_HOME: тесты никогда не трогают ~/.cargo."""
    home = tmp_path / "cargo-home"
    monkeypatch.setenv("CARGO_HOME", str(home))
    return home


@pytest.fixture
def config_file(cargo_home: Path) -> Path:
    """Путь к config.toml внутри изолированного CARGO_HOME (файл не создаётся)."""
    return cargo_home / "config.toml"


@pytest.fixture
def user_config(config_file: Path) -> Path:
    """config.toml с пользовательскими настройками, не относящимися к зеркалу."""
    write_toml(
        config_file,
        """
        # user settings
        [build]
        jobs = 4  # keep this comment

        [target.x86_64-unknown-linux-gnu]
        linker = "clang"

        [net]
        retry = 3
        """,
    )
    return config_file


@pytest.fixture(autouse=True)
def _reset_package_logging():
    """CLI настраивает логгер один раз на процесс; между тестами сбрасываем, чтобы handler не держал закрытый capsys-поток."""
    yield
    logger = logging.getLogger("rustproxy")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    setup_logging_once._inited = False  # type: ignore[attr-defined]
