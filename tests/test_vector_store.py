"""
Tests for the in-memory vector store.
"""

import threading

import pytest
from semsearch.vector.index import IVectorStore, SimpleInMemoryVectorStore, DEFAULT_TOP_K
from semsearch.vector.types import VectorRecord


@pytest.fixture
def store():
    return SimpleInMemoryVectorStore()


def test_vector_store_interface(store):
    """Test that SimpleInMemoryVectorStore implements IVectorStore interface."""
    assert isinstance(store, IVectorStore)


def test_upsert_and_fetch(store):
    store.upsert(VectorRecord(id="test_id", vector=[1.0, 0.0, 0.0], metadata={"key": "value"}))

    records = store.fetch_by_ids(["test_id"])

    assert len(records) == 1
    assert records[0].id == "test_id"
    assert records[0].metadata == {"key": "value"}


def test_fetch_skips_missing_ids(store):
    store.upsert(VectorRecord(id="a", vector=[1.0, 0.0], metadata={}))

    assert [r.id for r in store.fetch_by_ids(["missing", "a"])] == ["a"]
    assert store.fetch_by_ids(["missing"]) == []


def test_upsert_replaces_record(store):
    store.upsert(VectorRecord(id="a", vector=[1.0, 0.0], metadata={"v": 1}))
    store.upsert(VectorRecord(id="a", vector=[0.0, 1.0], metadata={"v": 2}))

    assert store.count() == 1
    assert store.fetch_by_ids(["a"])[0].metadata == {"v": 2}
    assert store.query([0.0, 1.0], top_k=1)[0].score == pytest.approx(1.0)


def test_stored_metadata_is_isolated(store):
    metadata = {"tags": ["x"]}
    store.upsert(VectorRecord(id="a", vector=[1.0, 0.0], metadata=metadata))

    metadata["tags"].append("y")
    fetched = store.fetch_by_ids(["a"])[0]
    fetched.metadata["tags"].append("z")

    assert store.fetch_by_ids(["a"])[0].metadata == {"tags": ["x"]}


def test_query_ranks_by_similarity(store):
    store.upsert(VectorRecord(id="record_1", vector=[1.0, 0.0, 0.0], metadata={"key": "value1"}))
    store.upsert(VectorRecord(id="record_2", vector=[0.0, 1.0, 0.0], metadata={"key": "value2"}))
    store.upsert(VectorRecord(id="record_3", vector=[0.7, 0.7, 0.0], metadata={"key": "value3"}))

    results = store.query([1.0, 0.0, 0.0], top_k=3)

    assert [r.id for r in results] == ["record_1", "record_3", "record_2"]
    assert results[0].score == pytest.approx(1.0)
    assert results[0].metadata == {"key": "value1"}
    assert results[0].score >= results[1].score >= results[2].score


def test_query_respects_top_k(store):
    for i in range(5):
        store.upsert(VectorRecord(id=f"r{i}", vector=[1.0, float(i)], metadata={}))

    assert len(store.query([1.0, 0.0], top_k=2)) == 2


def test_query_default_top_k(store):
    for i in range(DEFAULT_TOP_K + 5):
        store.upsert(VectorRecord(id=f"r{i}", vector=[1.0, float(i)], metadata={}))

    assert len(store.query([1.0, 0.0])) == DEFAULT_TOP_K


def test_query_custom_default_top_k():
    store = SimpleInMemoryVectorStore(default_top_k=3)
    for i in range(5):
        store.upsert(VectorRecord(id=f"r{i}", vector=[1.0, float(i)], metadata={}))

    assert len(store.query([1.0, 0.0])) == 3


def test_query_empty_store(store):
    assert store.query([1.0, 0.0, 0.0], top_k=5) == []


def test_query_zero_vector(store):
    store.upsert(VectorRecord(id="a", vector=[1.0, 0.0], metadata={}))

    assert store.query([0.0, 0.0]) == []


def test_delete_by_ids(store):
    store.upsert(VectorRecord(id="a", vector=[1.0, 0.0], metadata={}))
    store.upsert(VectorRecord(id="b", vector=[0.0, 1.0], metadata={}))

    store.delete_by_ids(["a", "never-existed"])

    assert store.fetch_by_ids(["a"]) == []
    assert [r.id for r in store.query([1.0, 0.0])] == ["b"]


def test_query_while_writer_thread_upserts(store):
    stop = threading.Event()
    errors = []

    def writer():
        i = 0
        while not stop.is_set():
            store.upsert(VectorRecord(id=f"w{i}", vector=[1.0, float(i % 7)], metadata={"i": i}))
            if i % 3 == 0:
                store.delete_by_ids([f"w{i - 1}"])
            i += 1

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        for _ in range(300):
            try:
                results = store.query([1.0, 1.0], top_k=5)
            except Exception as e:
                errors.append(e)
                break
            assert len({r.id for r in results}) == len(results)
    finally:
        stop.set()
        thread.join()

    assert errors == []
