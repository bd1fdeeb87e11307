import pytest

from unified_response.resources import Paginator


def test_descriptor_for_middle_page() -> None:
    paginator = Paginator(["c", "d"], total=5, per_page=2, current_page=2, path="/letters")

    assert paginator.to_dict() == {
        "current_page": 2,
        "data": ["c", "d"],
        "first_page_url": "/letters?page=1",
        "from": 3,
        "last_page": 3,
        "last_page_url": "/letters?page=3",
        "next_page_url": "/letters?page=3",
        "path": "/letters",
        "per_page": 2,
        "prev_page_url": "/letters?page=1",
        "to": 4,
        "total": 5,
    }


def test_empty_page_has_no_item_bounds() -> None:
    paginator = Paginator([], total=0, per_page=15)
    descriptor = paginator.to_dict()

    assert descriptor["from"] is None
    assert descriptor["to"] is None
    assert descriptor["last_page"] == 1
    assert descriptor["next_page_url"] is None
    assert descriptor["prev_page_url"] is None


def test_custom_page_name() -> None:
    paginator = Paginator([1], total=3, per_page=1, path="/items/", page_name="p")

    assert paginator.path == "/items"
    assert paginator.next_page_url() == "/items?p=2"


def test_map_and_iteration() -> None:
    paginator = Paginator([1, 2], total=2, per_page=2)

    assert paginator.map(lambda item: item * 10) == [10, 20]
    assert list(paginator) == [1, 2]
    assert len(paginator) == 2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"per_page": 0},
        {"current_page": 0},
        {"total": -1},
    ],
)
def test_invalid_arguments_are_rejected(kwargs) -> None:
    params = {"items": [], "total": 0, "per_page": 10}
    params.update(kwargs)
    with pytest.raises(ValueError):
        Paginator(**params)
