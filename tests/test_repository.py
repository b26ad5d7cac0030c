import uuid

import pytest

from droneplan.repository import (
    EstateDetail,
    NotFoundError,
    Repository,
    RepositoryError,
    TreeRecord,
)


@pytest.fixture
def repo():
    repository = Repository(":memory:")
    yield repository
    repository.close()


def test_create_estate_round_trip(repo):
    estate_id = repo.create_estate(width=20, length=10)
    detail = repo.get_detail_estate(estate_id)
    assert detail == EstateDetail(estate_id, 20, 10, [])


def test_estate_ids_are_unique(repo):
    ids = {repo.create_estate(5, 5) for _ in range(10)}
    assert len(ids) == 10


def test_create_tree_round_trip(repo):
    estate_id = repo.create_estate(20, 10)
    tree_id = repo.create_tree(estate_id, 5, 5, 10)
    detail = repo.get_detail_estate(estate_id)
    assert detail.trees == [TreeRecord(tree_id, 5, 5, 10)]


def test_trees_returned_in_insertion_order(repo):
    estate_id = repo.create_estate(1, 5)
    coords = [(2, 1, 10), (3, 1, 20), (4, 1, 10)]
    for x, y, height in coords:
        repo.create_tree(estate_id, x, y, height)
    trees = repo.get_detail_estate(estate_id).trees
    assert [(t.x, t.y, t.height) for t in trees] == coords


def test_trees_of_other_estates_are_excluded(repo):
    first = repo.create_estate(3, 3)
    second = repo.create_estate(3, 3)
    repo.create_tree(first, 1, 1, 4)
    second_tree = repo.create_tree(second, 2, 2, 7)
    assert [t.id for t in repo.get_detail_estate(second).trees] == [second_tree]


def test_estate_id_accepted_as_string(repo):
    estate_id = repo.create_estate(4, 6)
    repo.create_tree(str(estate_id), 1, 2, 3)
    detail = repo.get_detail_estate(str(estate_id))
    assert (detail.id, len(detail.trees)) == (estate_id, 1)


def test_missing_estate_raises_not_found(repo):
    with pytest.raises(NotFoundError):
        repo.get_detail_estate(uuid.uuid4())


def test_not_found_is_a_repository_error(repo):
    with pytest.raises(RepositoryError):
        repo.get_detail_estate(uuid.uuid4())


def test_invalid_estate_id_raises(repo):
    with pytest.raises(RepositoryError):
        repo.get_detail_estate("not-a-uuid")


def test_tree_for_unknown_estate_rejected(repo):
    with pytest.raises(RepositoryError):
        repo.create_tree(uuid.uuid4(), 1, 1, 1)


def test_get_test_by_id(repo):
    with repo.db:
        repo.db.execute("INSERT INTO test (id, name) VALUES (?, ?)", ("abc", "first"))
    assert repo.get_test_by_id("abc") == "first"


def test_get_test_by_id_missing(repo):
    with pytest.raises(NotFoundError):
        repo.get_test_by_id("missing")


def test_data_persists_in_file(tmp_path):
    path = str(tmp_path / "estates.db")
    with Repository(path) as first:
        estate_id = first.create_estate(8, 9)
        first.create_tree(estate_id, 2, 3, 4)
    with Repository(path) as second:
        detail = second.get_detail_estate(estate_id)
    assert (detail.width, detail.length, len(detail.trees)) == (8, 9, 1)


def test_closed_repository_raises_repository_error():
    repository = Repository(":memory:")
    with repository:
        pass
    with pytest.raises(RepositoryError):
        repository.create_estate(1, 1)