"""Test in-memory task repository."""
import threading

import pytest
from patterns.repository import RecordNotFound, matches, same_id, stringify, to_number
from verticals.tasks.models.task import Task
from verticals.tasks.repository import TaskNotFound, TaskRepository


@pytest.fixture
def repo():
    return TaskRepository.seeded()


def test_seeded_tasks(repo):
    tasks = repo.list()
    assert [t.id for t in tasks] == [1, 2]
    assert tasks[0].title == "Finish Homework"
    assert tasks[1].priority == "medium"
    assert not any(t.completed for t in tasks)


def test_list_empty_filter_keeps_insertion_order(repo):
    repo.create("X", "Y", "2025-01-01", "low")
    assert [t.id for t in repo.list({})] == [1, 2, 3]
    assert [t.id for t in repo.list(None)] == [1, 2, 3]


def test_list_filter_by_priority(repo):
    result = repo.list({"priority": "high"})
    assert [t.id for t in result] == [1]


def test_list_filters_combine_with_and(repo):
    repo.create("Call mom", "Weekly call", "2025-04-20", "high")
    assert [t.id for t in repo.list({"priority": "high", "due_date": "2025-04-20"})] == [1, 3]
    assert [t.id for t in repo.list({"priority": "high", "title": "Call mom"})] == [3]
    assert repo.list({"priority": "high", "title": "Buy Groceries"}) == []


def test_list_coerces_non_string_fields(repo):
    repo.mark_complete(2)
    assert [t.id for t in repo.list({"completed": "true"})] == [2]
    assert [t.id for t in repo.list({"completed": "false"})] == [1]
    assert [t.id for t in repo.list({"id": "1"})] == [1]


def test_list_coerces_numeric_strings(repo):
    assert [t.id for t in repo.list({"id": "01"})] == [1]
    assert [t.id for t in repo.list({"id": "1.0"})] == [1]
    assert [t.id for t in repo.list({"id": " 1 "})] == [1]
    assert [t.id for t in repo.list({"id": "0x2"})] == [2]
    assert repo.list({"id": "one"}) == []
    assert repo.list({"id": ""}) == []
    assert [t.id for t in repo.list({"completed": "0"})] == [1, 2]
    repo.mark_complete(2)
    assert [t.id for t in repo.list({"completed": "1"})] == [2]
    assert [t.id for t in repo.list({"completed": "0"})] == [1]


def test_list_string_fields_compare_exactly(repo):
    assert repo.list({"title": " Finish Homework"}) == []
    repo.update(1, {"title": "1"})
    assert repo.list({"title": "01"}) == []


def test_list_unknown_key_matches_nothing(repo):
    assert repo.list({"colour": "red"}) == []


def test_list_results_satisfy_every_clause(repo):
    repo.create("A", "B", "2025-05-01", "low")
    repo.create("C", "D", "2025-05-01", "high")
    filters = {"due_date": "2025-05-01", "priority": "high"}
    result = repo.list(filters)
    assert result
    assert all(t in repo.list() for t in result)
    assert all(matches(t, filters) for t in result)


def test_list_filters_on_injected_field(repo):
    repo.update(1, {"owner": "sam"})
    assert [t.id for t in repo.list({"owner": "sam"})] == [1]


def test_create_on_two_task_collection(repo):
    task = repo.create(title="X", description="Y", due_date="2025-01-01", priority="low")
    assert task.id == 3
    assert task.completed is False
    assert task.to_dict() == {
        "id": 3,
        "title": "X",
        "description": "Y",
        "due_date": "2025-01-01",
        "completed": False,
        "priority": "low",
    }
    assert len(repo) == 3
    assert repo.list()[-1] is task


def test_create_stores_values_unvalidated():
    repo = TaskRepository()
    task = repo.create(title=None, description=42, due_date="not-a-date", priority="")
    assert task.id == 1
    assert task.title is None
    assert task.description == 42
    assert task.due_date == "not-a-date"
    assert task.priority == ""


def test_create_reuses_id_of_deleted_tail(repo):
    repo.delete(2)
    task = repo.create("X", "Y", "2025-01-01", "low")
    assert task.id == 2


def test_create_never_duplicates_live_id(repo):
    repo.delete(1)
    task = repo.create("X", "Y", "2025-01-01", "low")
    assert task.id == 3
    ids = [t.id for t in repo.list()]
    assert len(ids) == len(set(ids))


def test_get(repo):
    assert repo.get(2).title == "Buy Groceries"


def test_update_partial_fields(repo):
    before = repo.get(2).to_dict()
    task = repo.update(2, {"priority": "low"})
    assert task.priority == "low"
    after = task.to_dict()
    for key in ("title", "description", "due_date", "completed"):
        assert after[key] == before[key]


def test_update_injects_extra_fields(repo):
    task = repo.update(1, {"tags": ["school"], "title": "Finish Essay"})
    assert task.title == "Finish Essay"
    assert task.to_dict()["tags"] == ["school"]


def test_update_can_overwrite_id(repo):
    repo.update(1, {"id": 10})
    assert repo.get(10).title == "Finish Homework"
    with pytest.raises(TaskNotFound):
        repo.get(1)


def test_update_boolean_id_breaks_lookup(repo):
    repo.update(1, {"id": True})
    with pytest.raises(TaskNotFound):
        repo.get(1)
    assert repo.get(2).title == "Buy Groceries"
    assert [t.id for t in repo.list({"id": "true"})] == [True]


def test_float_id_matches_equal_integer(repo):
    repo.update(1, {"id": 1.0})
    assert repo.get(1).title == "Finish Homework"


def test_create_skips_overwritten_float_ids():
    repo = TaskRepository([
        Task(id=2, title="a", description="b", due_date="2025-01-01", priority="low"),
        Task(id=3.0, title="c", description="d", due_date="2025-01-02", priority="low"),
    ])
    task = repo.create("X", "Y", "2025-01-03", "high")
    assert task.id == 4


def test_create_skips_past_highest_live_id():
    repo = TaskRepository([
        Task(id=3, title="a", description="b", due_date="2025-01-01", priority="low"),
        Task(id=4, title="c", description="d", due_date="2025-01-02", priority="low"),
        Task(id=4.5, title="e", description="f", due_date="2025-01-03", priority="low"),
    ])
    assert repo.create("X", "Y", "2025-01-04", "high").id == 5


def test_delete(repo):
    repo.delete(1)
    assert len(repo) == 1
    assert [t.id for t in repo.list()] == [2]
    with pytest.raises(TaskNotFound):
        repo.get(1)


def test_complete_incomplete_round_trip(repo):
    before = repo.get(1).to_dict()
    assert repo.mark_complete(1).completed is True
    assert repo.mark_complete(1).completed is True
    task = repo.mark_incomplete(1)
    assert task.completed is False
    assert task.to_dict() == before


def test_set_priority_accepts_any_value(repo):
    assert repo.set_priority(1, "urgent").priority == "urgent"
    assert repo.set_priority(1, "").priority == ""
    assert repo.set_priority(1, None).priority is None


@pytest.mark.parametrize("operation, args", [
    ("get", ()),
    ("update", ({"title": "x"},)),
    ("delete", ()),
    ("mark_complete", ()),
    ("mark_incomplete", ()),
    ("set_priority", ("low",)),
])
def test_missing_id_raises_not_found(repo, operation, args):
    for r in (repo, TaskRepository()):
        size = len(r)
        with pytest.raises(TaskNotFound) as exc_info:
            getattr(r, operation)(99, *args)
        assert isinstance(exc_info.value, RecordNotFound)
        assert exc_info.value.record_id == 99
        assert len(r) == size


def test_none_id_matches_nothing(repo):
    with pytest.raises(TaskNotFound):
        repo.get(None)


def test_not_found_message():
    assert TaskNotFound(5).message == "Task not found"


def test_clear(repo):
    repo.clear()
    assert len(repo) == 0
    assert repo.create("X", "Y", "2025-01-01", "low").id == 1


def test_concurrent_creates_get_distinct_ids():
    repo = TaskRepository()

    def worker():
        for _ in range(50):
            repo.create("t", "d", "2025-01-01", "low")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = [t.id for t in repo.list()]
    assert len(ids) == 200
    assert sorted(ids) == list(range(1, 201))


def test_stringify():
    assert stringify(True) == "true"
    assert stringify(False) == "false"
    assert stringify(3) == "3"
    assert stringify(3.0) == "3"
    assert stringify("high") == "high"
    assert stringify(None) is None


def test_task_get_field_falls_back_to_extra():
    task = Task(id=1, title="a", description="b", due_date="2025-01-01", priority="low")
    assert task.get_field("title") == "a"
    assert task.get_field("missing", "default") == "default"
    task.apply({"missing": 1})
    assert task.get_field("missing") == 1


def test_to_number():
    assert to_number("01") == 1
    assert to_number(" 2.5 ") == 2.5
    assert to_number("") == 0
    assert to_number("1e3") == 1000
    assert to_number("0x1A") == 26
    assert to_number("-Infinity") == float("-inf")
    assert to_number("inf") is None
    assert to_number("nan") is None
    assert to_number("1_000") is None
    assert to_number("12abc") is None


def test_same_id():
    assert same_id(1, 1)
    assert same_id(1.0, 1)
    assert not same_id(True, 1)
    assert not same_id(1, True)
    assert not same_id("1", 1)
    assert not same_id(None, None)
