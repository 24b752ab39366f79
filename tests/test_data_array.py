import pytest

from ofmesh.data_array import DataArray


def test_resize_fills_with_default_and_truncates():
    arr = DataArray("gdof", 3)
    arr.resize(4)
    assert list(arr) == [3, 3, 3, 3]
    arr[1] = 7
    arr.resize(2)
    assert list(arr) == [3, 7]


def test_negative_resize_raises():
    with pytest.raises(ValueError):
        DataArray("x").resize(-1)


def test_push_back_and_reset():
    arr = DataArray("w", 1.5)
    arr.push_back()
    arr.push_back()
    arr[0] = 9.0
    assert len(arr) == 2
    arr.reset(0)
    assert list(arr) == [1.5, 1.5]


def test_transfer_copies_into_tail():
    dst = DataArray("a", 0)
    dst.resize(5)
    src = DataArray("b", 0)
    src.resize(2)
    src[0], src[1] = 4, 8
    dst.transfer(src)
    assert list(dst) == [0, 0, 0, 4, 8]


def test_transfer_rejects_other_type_and_longer_source():
    dst = DataArray("a", 0)
    dst.resize(1)
    with pytest.raises(TypeError):
        dst.transfer(DataArray("b", 0.0))
    longer = DataArray("c", 0)
    longer.resize(3)
    with pytest.raises(ValueError):
        dst.transfer(longer)


def test_transfer_item():
    dst = DataArray("a", 0)
    dst.resize(3)
    src = DataArray("b", 0)
    src.resize(2)
    src[1] = 11
    dst.transfer_item(src, 1, 2)
    assert list(dst) == [0, 0, 11]
    with pytest.raises(TypeError):
        dst.transfer_item(DataArray("c", "s"), 0, 0)


def test_swap():
    arr = DataArray("a", 0)
    arr.resize(3)
    arr[0], arr[2] = 5, 6
    arr.swap(0, 2)
    assert list(arr) == [6, 0, 5]


def test_clone_is_independent():
    arr = DataArray("a", 2)
    arr.resize(2)
    copy = arr.clone()
    copy[0] = 99
    assert list(arr) == [2, 2]
    assert list(copy) == [99, 2]
    assert copy.name == "a"


def test_empty_clone_keeps_name_and_default():
    arr = DataArray("a", 2)
    arr.resize(3)
    empty = arr.empty_clone()
    assert len(empty) == 0
    empty.push_back()
    assert (empty.name, list(empty)) == ("a", [2])