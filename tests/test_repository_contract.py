"""
Behaviour every backend must share.

Each test runs against the in-memory and the database repositories through
the ``repos`` fixture.
"""

from __future__ import annotations

import pytest

from todolabels.core.errors import DuplicateError, NotFoundError, UnexpectedError
from todolabels.schemas import CreateLabel, CreateTodo, Label, Todo, UpdateTodo


async def make_labels(repos, *names: str) -> list[Label]:
    return [await repos.labels.create(CreateLabel(name=name)) for name in names]


class TestTodoCreate:
    """Tests for TodoRepository.create."""

    async def test_create_returns_hydrated_todo(self, repos) -> None:
        home, work = await make_labels(repos, "home", "work")

        todo = await repos.todos.create(CreateTodo(text="buy milk", label_ids={home.id, work.id}))

        assert todo.text == "buy milk"
        assert todo.completed is False
        assert sorted(label.id for label in todo.labels) == [home.id, work.id]
        assert {label.name for label in todo.labels} == {"home", "work"}

    async def test_create_without_labels(self, repos) -> None:
        todo = await repos.todos.create(CreateTodo(text="no labels"))

        assert todo.labels == []

    async def test_round_trip_find_equals_create(self, repos) -> None:
        (home,) = await make_labels(repos, "home")

        created = await repos.todos.create(CreateTodo(text="x", label_ids={home.id}))

        assert await repos.todos.find(created.id) == created

    async def test_ids_increase_in_creation_order(self, repos) -> None:
        first = await repos.todos.create(CreateTodo(text="first"))
        second = await repos.todos.create(CreateTodo(text="second"))

        assert second.id > first.id

    async def test_ids_not_reused_after_delete(self, repos) -> None:
        await repos.todos.create(CreateTodo(text="one"))
        second = await repos.todos.create(CreateTodo(text="two"))
        await repos.todos.delete(second.id)

        third = await repos.todos.create(CreateTodo(text="three"))

        assert third.id > second.id

    async def test_unknown_label_leaves_nothing_behind(self, repos) -> None:
        with pytest.raises(UnexpectedError):
            await repos.todos.create(CreateTodo(text="orphan", label_ids={999}))

        assert await repos.todos.all() == []


class TestTodoRead:
    """Tests for TodoRepository.find and all."""

    async def test_find_missing_raises_not_found(self, repos) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await repos.todos.find(42)

        assert exc_info.value.id == 42

    async def test_all_empty(self, repos) -> None:
        assert await repos.todos.all() == []

    async def test_all_newest_first_with_labels(self, repos) -> None:
        home, work = await make_labels(repos, "home", "work")
        first = await repos.todos.create(CreateTodo(text="first", label_ids={home.id}))
        second = await repos.todos.create(CreateTodo(text="second"))
        third = await repos.todos.create(CreateTodo(text="third", label_ids={home.id, work.id}))

        todos = await repos.todos.all()

        assert [todo.id for todo in todos] == [third.id, second.id, first.id]
        assert todos == [third, second, first]


class TestTodoUpdate:
    """Tests for TodoRepository.update."""

    async def test_partial_update_keeps_other_fields(self, repos) -> None:
        (home,) = await make_labels(repos, "home")
        todo = await repos.todos.create(CreateTodo(text="x", label_ids={home.id}))

        updated = await repos.todos.update(todo.id, UpdateTodo(completed=True))

        assert updated.completed is True
        assert updated.text == "x"
        assert updated.labels == todo.labels

    async def test_update_text(self, repos) -> None:
        todo = await repos.todos.create(CreateTodo(text="before"))

        updated = await repos.todos.update(todo.id, UpdateTodo(text="after"))

        assert updated.text == "after"
        assert updated.completed is False
        assert await repos.todos.find(todo.id) == updated

    async def test_empty_label_ids_clears_labels(self, repos) -> None:
        home, work = await make_labels(repos, "home", "work")
        todo = await repos.todos.create(CreateTodo(text="x", label_ids={home.id, work.id}))

        updated = await repos.todos.update(todo.id, UpdateTodo(label_ids=set()))

        assert updated.labels == []

    async def test_label_ids_replace_not_merge(self, repos) -> None:
        home, work, errand = await make_labels(repos, "home", "work", "errand")
        todo = await repos.todos.create(CreateTodo(text="x", label_ids={home.id, work.id}))

        updated = await repos.todos.update(todo.id, UpdateTodo(label_ids={errand.id}))

        assert updated.labels == [errand]

    async def test_update_without_fields_is_a_no_op(self, repos) -> None:
        (home,) = await make_labels(repos, "home")
        todo = await repos.todos.create(CreateTodo(text="x", label_ids={home.id}))

        assert await repos.todos.update(todo.id, UpdateTodo()) == todo

    async def test_update_missing_raises_not_found(self, repos) -> None:
        with pytest.raises(NotFoundError):
            await repos.todos.update(7, UpdateTodo(text="nope"))

        assert await repos.todos.all() == []

    async def test_update_with_unknown_label_changes_nothing(self, repos) -> None:
        (home,) = await make_labels(repos, "home")
        todo = await repos.todos.create(CreateTodo(text="x", label_ids={home.id}))

        with pytest.raises(UnexpectedError):
            await repos.todos.update(todo.id, UpdateTodo(text="changed", label_ids={999}))

        assert await repos.todos.find(todo.id) == todo


class TestTodoDelete:
    """Tests for TodoRepository.delete."""

    async def test_delete_then_find_raises_not_found(self, repos) -> None:
        (home,) = await make_labels(repos, "home")
        todo = await repos.todos.create(CreateTodo(text="x", label_ids={home.id}))

        await repos.todos.delete(todo.id)

        with pytest.raises(NotFoundError):
            await repos.todos.find(todo.id)
        assert await repos.todos.all() == []

    async def test_delete_missing_raises_not_found(self, repos) -> None:
        with pytest.raises(NotFoundError):
            await repos.todos.delete(3)

    async def test_delete_keeps_labels(self, repos) -> None:
        (home,) = await make_labels(repos, "home")
        todo = await repos.todos.create(CreateTodo(text="x", label_ids={home.id}))

        await repos.todos.delete(todo.id)

        assert await repos.labels.all() == [home]


class TestLabels:
    """Tests for LabelRepository."""

    async def test_create_and_list_ascending(self, repos) -> None:
        created = await make_labels(repos, "b", "a", "c")

        labels = await repos.labels.all()

        assert labels == sorted(created, key=lambda label: label.id)
        assert [label.name for label in labels] == ["b", "a", "c"]

    async def test_duplicate_name_carries_existing_id(self, repos) -> None:
        first = await repos.labels.create(CreateLabel(name="x"))

        with pytest.raises(DuplicateError) as exc_info:
            await repos.labels.create(CreateLabel(name="x"))

        assert exc_info.value.existing_id == first.id
        assert await repos.labels.all() == [first]

    async def test_find(self, repos) -> None:
        (home,) = await make_labels(repos, "home")

        assert await repos.labels.find(home.id) == home
        with pytest.raises(NotFoundError):
            await repos.labels.find(home.id + 100)

    async def test_delete(self, repos) -> None:
        home, work = await make_labels(repos, "home", "work")

        await repos.labels.delete(home.id)

        assert await repos.labels.all() == [work]

    async def test_delete_missing_raises_not_found(self, repos) -> None:
        with pytest.raises(NotFoundError):
            await repos.labels.delete(11)

    async def test_deleted_label_disappears_from_todos(self, repos) -> None:
        home, work = await make_labels(repos, "home", "work")
        todo = await repos.todos.create(CreateTodo(text="x", label_ids={home.id, work.id}))

        await repos.labels.delete(home.id)

        assert await repos.todos.find(todo.id) == Todo(
            id=todo.id, text="x", completed=False, labels=[work]
        )

    async def test_name_reusable_after_delete(self, repos) -> None:
        first = await repos.labels.create(CreateLabel(name="x"))
        await repos.labels.delete(first.id)

        second = await repos.labels.create(CreateLabel(name="x"))

        assert second.id != first.id
