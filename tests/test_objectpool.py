import pytest

from slogpp.objectpool import ObjectPool


def test_buffer_pool():
    pool = ObjectPool(list)
    with pool.get() as m1:
        assert pool.available() == 0
        assert pool.capacity() == 1
        with pool.get() as m2:
            assert pool.available() == 0
            assert pool.capacity() == 2
            assert m1 is not m2
    assert pool.available() == 2
    assert pool.capacity() == 2


def test_allocations():
    constructions = []

    def factory():
        obj = object()
        constructions.append(obj)
        return obj

    pool = ObjectPool(factory)
    assert len(constructions) == 0

    pool.reserve(1)
    assert len(constructions) == 1

    with pool.get():
        assert len(constructions) == 1
        with pool.get():
            assert len(constructions) == 2
    assert len(constructions) == 2
    assert pool.capacity() == 2
    assert pool.available() == 2


def test_reserve_never_shrinks():
    pool = ObjectPool(dict)
    pool.reserve(3)
    pool.reserve(1)
    assert pool.capacity() == 3
    assert pool.available() == 3


def test_objects_are_reused():
    pool = ObjectPool(list)
    with pool.get() as first:
        first.append("x")
    with pool.get() as second:
        assert second is first
    assert pool.capacity() == 1


def test_object_returned_on_error():
    pool = ObjectPool(list)
    with pytest.raises(RuntimeError):
        with pool.get():
            raise RuntimeError("boom")
    assert pool.available() == pool.capacity()