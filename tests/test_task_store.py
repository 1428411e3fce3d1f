import threading

import pytest

from api.services.task_store import MAX_TITLE_LENGTH, TaskStore, TaskValidationError


def test_list_empty_store(store):
    """A new store lists nothing"""
    assert store.list_tasks() == []
    assert store.count() == 0


def test_ids_start_at_one_and_increase(store):
    """Sequential creates get 1, 2, 3, ... with no gaps"""
    ids = [store.create_task(f"Task {n}").id for n in range(5)]
    assert ids == [1, 2, 3, 4, 5]


def test_create_trims_title(store):
    task = store.create_task("  Buy milk  ")
    assert task.title == "Buy milk"
    assert task.completed is False
    assert task.created_at == task.updated_at


@pytest.mark.parametrize("title", ["", "   ", "x" * (MAX_TITLE_LENGTH + 1)])
def test_create_rejects_invalid_title(store, title):
    """Invalid titles raise and leave the collection unchanged"""
    store.create_task("Existing")
    before = store.count()

    with pytest.raises(TaskValidationError):
        store.create_task(title)

    assert store.count() == before


def test_create_accepts_title_at_max_length(store):
    task = store.create_task("x" * MAX_TITLE_LENGTH)
    assert len(task.title) == MAX_TITLE_LENGTH


def test_failed_create_does_not_consume_id(store):
    with pytest.raises(TaskValidationError):
        store.create_task("")
    assert store.create_task("First").id == 1


def test_create_rejects_non_string_title(store):
    with pytest.raises(TaskValidationError):
        store.create_task(42)


def test_get_unknown_id_returns_none(store):
    store.create_task("Something")
    assert store.get_task(9999) is None
    assert store.get_task(0) is None
    assert store.get_task(-1) is None


def test_create_then_get_round_trip(store):
    created = store.create_task("Round trip")
    assert store.get_task(created.id) == created


def test_list_keeps_insertion_order(store):
    for title in ["a", "b", "c"]:
        store.create_task(title)
    store.delete_task(2)
    store.create_task("d")

    assert [task.title for task in store.list_tasks()] == ["a", "c", "d"]
    assert [task.id for task in store.list_tasks()] == [1, 3, 4]


def test_update_title_only(store, clock):
    """Changing the title keeps completed and createdAt"""
    task = store.create_task("Old")
    store.update_task(task.id, completed=True)
    clock.advance(5)

    updated = store.update_task(task.id, title="New")

    assert updated.title == "New"
    assert updated.completed is True
    assert updated.created_at == task.created_at
    assert updated.updated_at == clock.now
    assert updated.updated_at > task.updated_at


def test_update_completed_only(store):
    task = store.create_task("Keep me")
    updated = store.update_task(task.id, completed=True)
    assert updated.completed is True
    assert updated.title == "Keep me"


def test_update_with_no_fields_refreshes_updated_at(store, clock):
    task = store.create_task("No-op")
    clock.advance(10)

    updated = store.update_task(task.id)

    assert updated.title == task.title
    assert updated.completed == task.completed
    assert updated.updated_at == clock.now


def test_update_trims_title(store):
    task = store.create_task("Old")
    assert store.update_task(task.id, title="  New  ").title == "New"


@pytest.mark.parametrize("title", ["", "  ", "y" * (MAX_TITLE_LENGTH + 1)])
def test_invalid_update_changes_nothing(store, clock, title):
    """An invalid title rejects the whole update, completed included"""
    task = store.create_task("Stable")
    clock.advance(3)

    with pytest.raises(TaskValidationError):
        store.update_task(task.id, title=title, completed=True)

    assert store.get_task(task.id) == task


def test_update_rejects_non_boolean_completed(store):
    task = store.create_task("Strict")
    with pytest.raises(TaskValidationError):
        store.update_task(task.id, completed="yes")
    assert store.get_task(task.id).completed is False


def test_update_unknown_id_returns_none(store):
    assert store.update_task(42, title="Nothing") is None
    assert store.count() == 0


def test_update_never_moves_updated_at_before_created_at(store, clock):
    task = store.create_task("Clock skew")
    clock.advance(-60)

    updated = store.update_task(task.id, completed=True)

    assert updated.updated_at >= updated.created_at


def test_delete(store):
    task = store.create_task("Remove me")
    assert store.delete_task(task.id) is True
    assert store.get_task(task.id) is None
    assert store.delete_task(task.id) is False


def test_deleted_id_is_never_reused(store):
    first = store.create_task("One")
    store.delete_task(first.id)
    second = store.create_task("Two")
    assert second.id == first.id + 1


def test_returned_tasks_are_copies(store):
    """Mutating a returned task does not touch the stored one"""
    task = store.create_task("Original")
    task.title = "Tampered"
    store.list_tasks()[0].completed = True

    stored = store.get_task(task.id)
    assert stored.title == "Original"
    assert stored.completed is False


def test_seed_creates_tasks_in_order(store):
    seeded = store.seed(["Write report", "Buy milk"])
    assert [task.id for task in seeded] == [1, 2]
    assert [task.title for task in store.list_tasks()] == ["Write report", "Buy milk"]


def test_concurrent_creates_get_unique_ids():
    store = TaskStore()

    def worker():
        for _ in range(50):
            store.create_task("Parallel")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    ids = [task.id for task in store.list_tasks()]
    assert len(ids) == 400
    assert sorted(ids) == list(range(1, 401))


def test_full_lifecycle(store):
    """Create, list, complete, fetch, delete"""
    task = store.create_task("Write report")
    assert (task.id, task.title, task.completed) == (1, "Write report", False)
    assert store.list_tasks() == [task]

    store.update_task(1, completed=True)
    assert store.get_task(1).completed is True

    assert store.delete_task(1) is True
    assert store.list_tasks() == []


def test_delete_racing_update_never_half_applies():
    """Each update either fully applies or sees the task gone"""
    for _ in range(20):
        store = TaskStore()
        task = store.create_task("Contested")
        start = threading.Barrier(2)
        results = []

        def updater():
            start.wait()
            for _ in range(200):
                results.append(store.update_task(task.id, title="Renamed", completed=True))

        def deleter():
            start.wait()
            store.delete_task(task.id)

        threads = [threading.Thread(target=updater), threading.Thread(target=deleter)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for result in results:
            assert result is None or (result.title == "Renamed" and result.completed is True)
        # Once an update sees the task gone, it stays gone
        first_missing = next((n for n, result in enumerate(results) if result is None), len(results))
        assert all(result is None for result in results[first_missing:])
        assert store.get_task(task.id) is None
