"""
E2E conftest: run the seed script once per session into a temporary
variants directory, so the repository's data/variants is never touched.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import seed
from backend.api import app
from models import VariantOption


@pytest.fixture(scope="session")
def variants_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("variants")


@pytest.fixture(scope="session")
def seeded(variants_dir: Path) -> dict[str, list[VariantOption]]:
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(seed, "VARIANTS_DIR", variants_dir)
        return seed.seed_all()


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
