import asyncio

import pytest

from tabula.bootstrap.config.loader import CONFIG_ENV
from tabula.core.service.inspector import KeyInspector
from tabula.infra.lmdb_storage.aiobackend import LMDBStorage
from tests.fake.fake_storage import FakeStorage


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    # never pick up a developer's tabula.yaml or TABULA_* variables
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    for name in ("TABULA_SCAN__LIMIT", "TABULA_SCAN__MODE", "TABULA_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def inspector() -> KeyInspector:
    return KeyInspector()


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def lmdb_storage(tmp_path):
    path = tmp_path / "lmdb"
    path.mkdir()
    storage = LMDBStorage(str(path), map_size=1 << 22)
    yield storage
    asyncio.run(storage.close())
