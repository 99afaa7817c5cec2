from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from apiv7_request.constants import ServiceType  # noqa: E402
from apiv7_request.upgraders.registry import TranslationRegistry  # noqa: E402
from tests.shared.fakes import RecordingResourceFactory, RecordingStrategy  # noqa: E402


@pytest.fixture
def strategy() -> RecordingStrategy:
    return RecordingStrategy()


@pytest.fixture
def registry(strategy: RecordingStrategy) -> TranslationRegistry:
    return TranslationRegistry({ServiceType.V7: strategy, ServiceType.ICEBERG: strategy})


@pytest.fixture
def resource_factory() -> RecordingResourceFactory:
    return RecordingResourceFactory()
