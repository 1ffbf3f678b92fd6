"""Test commit actions, undo callbacks and failure behaviour."""

from unittest.mock import Mock

import pytest

from undoredo.manager import UndoRedoManager
from undoredo.state_provider import DictStateProvider


@pytest.fixture
def store():
    return DictStateProvider({"a": 0})


@pytest.fixture
def manager(store):
    manager = UndoRedoManager(store, {"a"}, max_size=10)
    manager.init()
    return manager


def test_action_result_is_passed_to_on_undo(store, manager):
    on_undo = Mock()
    store.set("a", 1)
    commit = manager.commit(action=lambda: 42, on_undo=on_undo)

    assert commit.revert_result == 42
    manager.undo()
    on_undo.assert_called_once_with(42)


def test_redo_reruns_action_and_refreshes_result(store, manager):
    action = Mock(side_effect=[42, 43])
    on_undo = Mock()
    store.set("a", 1)
    manager.commit(action=action, on_undo=on_undo)
    assert action.call_count == 1

    manager.undo()
    on_undo.assert_called_with(42)

    manager.redo()
    assert action.call_count == 2

    manager.undo()
    on_undo.assert_called_with(43)
    assert on_undo.call_count == 2


def test_action_runs_before_snapshot(store, manager):
    def action():
        store.set("a", 9)
        return "done"

    commit = manager.commit(action=action)

    assert commit is not None
    assert commit.changes == {"a": 9}
    assert commit.revert_result == "done"


def test_action_runs_even_when_nothing_is_recorded(manager):
    action = Mock(return_value=None)
    assert manager.commit(action=action) is None
    action.assert_called_once_with()


def test_on_undo_without_action_receives_none(store, manager):
    on_undo = Mock()
    store.set("a", 1)
    manager.commit(on_undo=on_undo)
    manager.undo()
    on_undo.assert_called_once_with(None)


def test_redo_without_action_keeps_result(store, manager):
    store.set("a", 1)
    commit = manager.commit()
    manager.undo()
    manager.redo()
    assert commit.revert_result is None


def test_undo_does_not_touch_changes(store, manager):
    store.set("a", 1)
    commit = manager.commit(action=lambda: 1)
    manager.undo()
    assert commit.changes == {"a": 1}
    assert commit.revert_result == 1


def test_failing_action_prevents_commit(store, manager):
    store.set("a", 1)

    def action():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        manager.commit(action=action)

    assert len(manager) == 1
    assert manager.position == 0
    assert not manager.can_undo.value


def test_failing_comparator_prevents_commit():
    def comparator(key, new, old):
        raise ValueError("cannot compare")

    store = DictStateProvider({"a": 0})
    manager = UndoRedoManager(store, {"a"}, comparator=comparator)
    manager.init()
    store.set("a", 1)

    with pytest.raises(ValueError):
        manager.commit()
    assert len(manager) == 1


def test_failing_on_undo_leaves_store_rewritten_and_position(store, manager):
    store.set("a", 1)
    manager.commit(on_undo=Mock(side_effect=RuntimeError("boom")))

    with pytest.raises(RuntimeError):
        manager.undo()

    # Store already reverted, position not moved
    assert store.get("a") == 0
    assert manager.position == 1
    assert manager.can_undo.value


def test_failing_action_on_redo_keeps_position(store, manager):
    action = Mock(side_effect=[1, RuntimeError("boom")])
    store.set("a", 1)
    manager.commit(action=action)
    manager.undo()

    with pytest.raises(RuntimeError):
        manager.redo()

    assert store.get("a") == 1
    assert manager.position == 0
    assert manager.can_redo.value
