"""
Test cases for FaissVectorStore implementation.
"""

import threading

import pytest

pytest.importorskip("faiss")

from semsearch.core.errors import VectorStoreError
from semsearch.vector import FaissVectorStore, VectorRecord


def _unit(dimension, position):
    vector = [0.0] * dimension
    vector[position] = 1.0
    return vector


@pytest.fixture
def store():
    return FaissVectorStore(dimension=8)


def test_faiss_store_initialization(store):
    assert store.dimension == 8
    assert store.count() == 0


def test_faiss_store_upsert_and_fetch(store):
    store.upsert(VectorRecord(id="test_id_1", vector=[0.5] * 8, metadata={"test": "data"}))

    records = store.fetch_by_ids(["test_id_1", "missing"])

    assert len(records) == 1
    assert records[0].id == "test_id_1"
    assert records[0].metadata == {"test": "data"}
    assert store.index.ntotal == 1


def test_faiss_store_upsert_replaces(store):
    store.upsert(VectorRecord(id="a", vector=_unit(8, 0), metadata={"v": 1}))
    store.upsert(VectorRecord(id="a", vector=_unit(8, 3), metadata={"v": 2}))

    assert store.count() == 1
    assert store.index.ntotal == 1
    assert store.fetch_by_ids(["a"])[0].metadata == {"v": 2}

    results = store.query(_unit(8, 3), top_k=5)
    assert [r.id for r in results] == ["a"]
    assert results[0].score == pytest.approx(1.0)


def test_faiss_store_query_ranking(store):
    store.upsert(VectorRecord(id="record_1", vector=_unit(8, 0), metadata={"k": 1}))
    store.upsert(VectorRecord(id="record_2", vector=_unit(8, 4), metadata={"k": 2}))
    store.upsert(VectorRecord(id="record_3", vector=[1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0], metadata={"k": 3}))

    results = store.query(_unit(8, 0), top_k=3)

    assert [r.id for r in results] == ["record_1", "record_3", "record_2"]
    assert results[0].metadata == {"k": 1}
    assert isinstance(results[0].score, float)


def test_faiss_store_top_k_larger_than_index(store):
    store.upsert(VectorRecord(id="a", vector=_unit(8, 0), metadata={}))

    assert len(store.query(_unit(8, 0), top_k=50)) == 1


def test_faiss_store_default_top_k():
    store = FaissVectorStore(dimension=4, default_top_k=2)
    for i in range(4):
        store.upsert(VectorRecord(id=f"r{i}", vector=[1.0, float(i), 0.0, 0.0], metadata={}))

    assert len(store.query([1.0, 0.0, 0.0, 0.0])) == 2


def test_faiss_store_delete(store):
    store.upsert(VectorRecord(id="a", vector=_unit(8, 0), metadata={}))
    store.upsert(VectorRecord(id="b", vector=_unit(8, 1), metadata={}))

    store.delete_by_ids(["a", "unknown"])

    assert store.fetch_by_ids(["a"]) == []
    assert store.index.ntotal == 1
    assert [r.id for r in store.query(_unit(8, 0), top_k=5)] == ["b"]


def test_faiss_store_dimension_mismatch(store):
    with pytest.raises(VectorStoreError, match="dimension"):
        store.upsert(VectorRecord(id="a", vector=[1.0, 0.0, 0.0], metadata={}))


def test_faiss_store_concurrent_upserts_keep_one_vector_per_id(store):
    def upsert_same_id(worker):
        for i in range(50):
            store.upsert(VectorRecord(id="shared", vector=_unit(8, (worker + i) % 8), metadata={"w": worker}))

    threads = [threading.Thread(target=upsert_same_id, args=(w,)) for w in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.count() == 1
    assert store.index.ntotal == 1
    assert [r.id for r in store.query(_unit(8, 0), top_k=5)] == ["shared"]


def test_faiss_store_empty_search(store):
    assert store.query(_unit(8, 0), top_k=5) == []
