"""Shared fixtures: scripted model clients and a recording backoff sleep."""

from collections.abc import Callable

import pytest

from coursequiz.config import GenerationConfig
from coursequiz.generation.client import LazyModelClient
from helpers import ScriptedModelClient

ClientFactory = Callable[[list[str | Exception]], tuple[LazyModelClient, ScriptedModelClient]]


@pytest.fixture
def generation_config() -> GenerationConfig:
    return GenerationConfig(model="test-model", max_attempts=3, base_delay_seconds=5.0)


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def recording_sleep(sleeps: list[float]) -> Callable[[float], None]:
    return sleeps.append


@pytest.fixture
def make_client(generation_config: GenerationConfig) -> ClientFactory:
    """Build a configured LazyModelClient around a ScriptedModelClient."""

    def _make(script: list[str | Exception]) -> tuple[LazyModelClient, ScriptedModelClient]:
        scripted = ScriptedModelClient(script)
        handle = LazyModelClient(generation_config, "test-key", factory=lambda: scripted)
        return handle, scripted

    return _make
