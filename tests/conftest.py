"""Shared test fixtures."""

import pytest
from crusoe import CoreConfig


@pytest.fixture
def config() -> CoreConfig:
    return CoreConfig()
