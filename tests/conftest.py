from __future__ import annotations

import pytest

from tests._fixtures.archive_builder import ArchiveBuilder
from tests._fixtures.fakes import FakeFileOps, FakeLookup


@pytest.fixture
def archive_builder() -> ArchiveBuilder:
    """Provide a fresh in-memory archive builder."""
    return ArchiveBuilder()


@pytest.fixture
def fake_file_ops() -> FakeFileOps:
    return FakeFileOps()


@pytest.fixture
def empty_lookup() -> FakeLookup:
    return FakeLookup()
