from __future__ import annotations

import shutil
import sys
from pathlib import Path

import pytest

# pytest may run without installing the project; ensure repo root is importable.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from strategy_engine.core.config import EngineConfig  # noqa: E402


@pytest.fixture()
def temp_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture()
def test_config(temp_dir: Path) -> EngineConfig:
    """Config fixture loaded from a temp copy of the repo defaults."""

    cfg_src = REPO_ROOT / "config" / "default.yaml"
    cfg_dst_dir = temp_dir / "config"
    cfg_dst_dir.mkdir(parents=True, exist_ok=True)

    shutil.copy2(cfg_src, cfg_dst_dir / "default.yaml")
    shutil.copytree(REPO_ROOT / "config" / "presets", cfg_dst_dir / "presets")

    return EngineConfig.from_yaml(cfg_dst_dir / "default.yaml")
