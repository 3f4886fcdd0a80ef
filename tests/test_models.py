from datetime import datetime, timedelta
from uuid import UUID

import pytest
from pydantic import ValidationError

from todolist.models import ToDo, default_due_date, sample_todos


def make_todo(title="Buy milk", **kwargs):
    kwargs.setdefault("due_date", datetime(2030, 5, 1, 9, 30))
    return ToDo(title=title, **kwargs)


class TestToDoConstruction:
    def test_defaults(self):
        todo = make_todo()
        assert isinstance(todo.id, UUID)
        assert todo.is_complete is False
        assert todo.notes is None

    def test_each_todo_gets_a_new_id(self):
        assert make_todo().id != make_todo().id

    def test_no_validation_of_title_or_date(self):
        todo = ToDo(title="", due_date=datetime(1999, 1, 1))
        assert todo.title == ""
        assert todo.due_date.year == 1999

    def test_id_cannot_be_reassigned(self):
        todo = make_todo()
        original = todo.id
        with pytest.raises(ValidationError):
            todo.id = make_todo().id
        assert todo.id == original

    def test_fields_are_mutable(self):
        todo = make_todo()
        todo.title = "Buy oat milk"
        todo.is_complete = True
        todo.notes = "Two cartons"
        assert (todo.title, todo.is_complete, todo.notes) == ("Buy oat milk", True, "Two cartons")


class TestIdentity:
    def test_equal_when_ids_match_despite_other_fields(self):
        a = make_todo(title="Buy milk")
        b = a.model_copy(update={"title": "Call mum", "is_complete": True, "notes": "Sunday"})
        assert a == b
        assert hash(a) == hash(b)

    def test_not_equal_with_different_ids(self):
        a = make_todo()
        b = make_todo()
        assert a != b

    def test_usable_as_set_and_dict_key(self):
        a = make_todo()
        edited = a.model_copy(update={"title": "Edited"})
        assert len({a, edited}) == 1
        assert {a: 1}[edited] == 1

    def test_not_equal_to_other_types(self):
        todo = make_todo()
        assert todo != todo.id
        assert todo != {"id": todo.id}


class TestDefaults:
    def test_default_due_date_is_one_day_later(self):
        now = datetime(2030, 1, 1, 12, 0)
        assert default_due_date(now) == now + timedelta(hours=24)

    def test_sample_todos(self):
        now = datetime(2030, 1, 1, 8, 0)
        samples = sample_todos(now)
        assert [t.title for t in samples] == [
            "Renew the ID",
            "Call my brother",
            "Read The Swift Programming Language Book",
            "Watch Ted Lasso",
            "Finish that app",
            "Work at Apple",
            "Visit all 27 Egypt's governorates",
        ]
        assert all(t.is_complete is False for t in samples)
        assert all(t.due_date == now for t in samples)
        assert samples[2].notes is None
        assert samples[6].notes is None
        assert samples[1].notes == "Discuss the latest Apple announcements"
        assert len(set(samples)) == 7

    def test_sample_todos_are_fresh_each_call(self):
        first = {t.id for t in sample_todos()}
        second = {t.id for t in sample_todos()}
        assert first.isdisjoint(second)
