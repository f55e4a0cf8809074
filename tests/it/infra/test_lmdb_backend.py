import pytest

from tabula.infra.lmdb_storage.backend import LMDBBackend


def setup_backend(tmp_path):
    backend = LMDBBackend(path=str(tmp_path), map_size=1 << 16)
    ks = b"a"
    return backend, ks


def insert(backend, ks, items):
    for k, v in items:
        backend.put(ks, k, v)


ITEMS = [
    (b"bar1", b"1"), (b"bar2", b"2"), (b"bar_a", b"3"),
    (b"foo1", b"1"), (b"foo2", b"2"), (b"foo_a", b"3"),
    (b"toto1", b"1"), (b"toto2", b"2"),
]


@pytest.mark.it
def test_basic_scan(tmp_path):
    backend, ks = setup_backend(tmp_path)
    insert(backend, ks, ITEMS)

    assert backend.scan(ks) == sorted(ITEMS)


@pytest.mark.it
def test_scan_empty_db(tmp_path):
    backend, ks = setup_backend(tmp_path)
    assert backend.scan(ks) == []


@pytest.mark.it
def test_scan_half_open_range(tmp_path):
    backend, ks = setup_backend(tmp_path)
    insert(backend, ks, ITEMS)

    out = backend.scan(ks, start=b"bar2", end=b"foo2")

    assert out == [(b"bar2", b"2"), (b"bar_a", b"3"), (b"foo1", b"1")]


@pytest.mark.it
def test_scan_start_only(tmp_path):
    backend, ks = setup_backend(tmp_path)
    insert(backend, ks, ITEMS)

    out = backend.scan(ks, start=b"foo_")

    assert out == [(b"foo_a", b"3"), (b"toto1", b"1"), (b"toto2", b"2")]


@pytest.mark.it
def test_scan_end_only(tmp_path):
    backend, ks = setup_backend(tmp_path)
    insert(backend, ks, ITEMS)

    assert backend.scan(ks, end=b"bar2") == [(b"bar1", b"1")]


@pytest.mark.it
def test_scan_limit(tmp_path):
    backend, ks = setup_backend(tmp_path)
    insert(backend, ks, ITEMS)

    assert backend.scan(ks, start=b"foo", limit=2) == [(b"foo1", b"1"), (b"foo2", b"2")]
    assert backend.scan(ks, limit=0) == []


@pytest.mark.it
def test_scan_start_after_all(tmp_path):
    backend, ks = setup_backend(tmp_path)
    insert(backend, ks, ITEMS)

    assert backend.scan(ks, start=b"z") == []


@pytest.mark.it
def test_scan_empty_range(tmp_path):
    backend, ks = setup_backend(tmp_path)
    insert(backend, ks, ITEMS)

    assert backend.scan(ks, start=b"foo", end=b"foo") == []
    assert backend.scan(ks, start=b"t", end=b"f") == []


@pytest.mark.it
def test_put_many_and_get(tmp_path):
    backend, _ = setup_backend(tmp_path)
    backend.put_many([(b"a", b"k1", b"v1"), (b"b", b"k1", b"v2")])

    assert backend.get(b"a", b"k1") == b"v1"
    assert backend.get(b"b", b"k1") == b"v2"
    assert backend.get(b"a", b"missing") is None
