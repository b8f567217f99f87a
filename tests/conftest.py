"""Shared pytest fixtures for pathmap tests."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
import yaml

from pathmap.infrastructure.config_manager import ConfigManager
from pathmap.infrastructure.logger import ROOT_LOGGER
from pathmap.repository import PathMappingRepository


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def res_dir(temp_dir: Path) -> Path:
    """Create a resource directory with a css/ tree and a js/ tree.

    res/
      css/
        icons/
          arrow.svg
          logo.png
        reset.css
        style.css
      js/
        app.js
    """
    res = temp_dir / "res"
    res.mkdir()

    css = res / "css"
    css.mkdir()
    (css / "style.css").write_text("body { color: black; }")
    (css / "reset.css").write_text("* { margin: 0; }")

    icons = css / "icons"
    icons.mkdir()
    (icons / "logo.png").write_bytes(b"\x89PNG")
    (icons / "arrow.svg").write_text("<svg/>")

    js = res / "js"
    js.mkdir()
    (js / "app.js").write_text("console.log('app');")

    return res


@pytest.fixture
def css_dir(res_dir: Path) -> Path:
    return res_dir / "css"


@pytest.fixture
def repo() -> PathMappingRepository:
    """An empty repository on a memory store."""
    return PathMappingRepository()


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample pathmap configuration."""
    return {
        "pathmap": {
            "store": {
                "backend": "yaml",
                "path": "/tmp/pathmap-store.yaml",
            },
            "logging": {
                "level": "DEBUG",
                "file": None,
            },
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "pathmap.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep PATHMAP_* variables and config files of the host out of the tests."""
    monkeypatch.setattr(ConfigManager, "SYSTEM_CONFIG_FILE", str(tmp_path / "etc" / "config.yaml"))
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", str(tmp_path / "home" / "config.yaml"))
    for key in list(os.environ):
        if key.startswith("PATHMAP_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture(autouse=True)
def reset_pathmap_logger():
    """Undo logging configured by a test (the CLI configures ``pathmap``)."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
