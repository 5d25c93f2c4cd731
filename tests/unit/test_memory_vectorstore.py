import pytest

from ragserver.core.exceptions import (
    DimensionMismatchError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
)
from ragserver.vectorstore.memory import InMemoryVectorStore
from ragserver.vectorstore.protocol import VectorStoreProtocol


def test_satisfies_protocol(vectorstore) -> None:
    assert isinstance(vectorstore, VectorStoreProtocol)


@pytest.mark.asyncio
async def test_upsert_overwrites_same_id(vectorstore) -> None:
    await vectorstore.upsert("idx", "a", [1.0, 0.0], {"text": "old"})
    await vectorstore.upsert("idx", "a", [0.0, 1.0], {"text": "new"})

    assert vectorstore.count("idx") == 1
    matches = await vectorstore.query("idx", [0.0, 1.0], top_k=5)
    assert matches[0].metadata == {"text": "new"}
    assert matches[0].score == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_query_orders_filters_and_truncates(vectorstore) -> None:
    await vectorstore.upsert("idx", "same", [1.0, 0.0])
    await vectorstore.upsert("idx", "close", [1.0, 1.0])
    await vectorstore.upsert("idx", "opposite", [-1.0, 0.0])

    matches = await vectorstore.query("idx", [1.0, 0.0], top_k=5, score_threshold=0.0)
    assert [m.id for m in matches] == ["same", "close"]

    top_one = await vectorstore.query("idx", [1.0, 0.0], top_k=1)
    assert [m.id for m in top_one] == ["same"]


@pytest.mark.asyncio
async def test_query_unknown_index_raises(vectorstore) -> None:
    with pytest.raises(IndexNotFoundError):
        await vectorstore.query("missing", [1.0], top_k=3)


@pytest.mark.asyncio
async def test_dimension_mismatch_raises(vectorstore) -> None:
    await vectorstore.upsert("idx", "a", [1.0, 0.0, 0.0])

    with pytest.raises(DimensionMismatchError):
        await vectorstore.upsert("idx", "b", [1.0, 0.0])
    with pytest.raises(DimensionMismatchError):
        await vectorstore.query("idx", [1.0], top_k=1)


@pytest.mark.asyncio
async def test_create_index_and_metrics() -> None:
    store = InMemoryVectorStore(auto_create=False)
    await store.create_index("dots", dimension=2, metric="dotproduct")
    await store.create_index("dist", dimension=2, metric="euclidean")

    await store.upsert("dots", "big", [3.0, 4.0])
    await store.upsert("dist", "far", [3.0, 4.0])

    dots = await store.query("dots", [1.0, 0.0], top_k=1)
    dist = await store.query("dist", [0.0, 0.0], top_k=1)
    assert dots[0].score == pytest.approx(3.0)
    assert dist[0].score == pytest.approx(-5.0)

    with pytest.raises(IndexAlreadyExistsError):
        await store.create_index("dots", dimension=2)


@pytest.mark.asyncio
async def test_upsert_without_auto_create_requires_index() -> None:
    store = InMemoryVectorStore(auto_create=False)

    with pytest.raises(IndexNotFoundError):
        await store.upsert("missing", "a", [1.0])
