import pytest

from campaign_flow.id_allocator import IdAllocator


def test_next_is_strictly_increasing():
    ids = IdAllocator(start=2)
    issued = [ids.next() for _ in range(5)]
    assert issued == [2, 3, 4, 5, 6]
    assert ids.next_id == 7


def test_reserve_advances_by_stride():
    ids = IdAllocator(start=2, stride=4)
    assert ids.reserve(2) == [2, 3]
    assert ids.reserve(2) == [6, 7]
    assert ids.next_id == 10


def test_reserve_larger_than_stride_never_overlaps():
    ids = IdAllocator(start=1, stride=2)
    first = ids.reserve(3)
    second = ids.reserve(1)
    assert first == [1, 2, 3]
    assert second == [4]


@pytest.mark.parametrize("stride", [0, -1])
def test_rejects_non_positive_stride(stride):
    with pytest.raises(ValueError):
        IdAllocator(stride=stride)


def test_rejects_empty_reservation():
    with pytest.raises(ValueError):
        IdAllocator().reserve(0)
