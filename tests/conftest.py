"""Test setup for flagdoc."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from flagdoc import ConfigBlock, RootBlock, build_config_tree  # noqa: E402
from sample_config import ROOT_BLOCKS, Config  # noqa: E402


@pytest.fixture
def config() -> Config:
    """A fresh default configuration instance."""
    return Config()


@pytest.fixture
def root_blocks() -> list[RootBlock]:
    return list(ROOT_BLOCKS)


@pytest.fixture
def config_tree(config: Config, root_blocks: list[RootBlock]) -> list[ConfigBlock]:
    """The deduplicated block tree of the sample configuration."""
    return build_config_tree(config, root_blocks)
