"""Commit-based undo/redo over an external key-value store.

The manager keeps a bounded, linear history of snapshots of the observed
keys. The host mutates the store through its normal means and then calls
:meth:`UndoRedoManager.commit`; the manager diffs the store against the
last committed snapshot and records a new entry only when a trigger key
actually changed.

All mutating calls are expected to come from a single owner (one event
thread or an external lock). The ``(history, position)`` pair is published
as one immutable :class:`HistorySnapshot`, so readers on other threads
always see a consistent pair.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, NamedTuple, Optional, Tuple

from .commit import Commit, CommitAction, RevertCallback
from .constants import UndoRedoConstants
from .errors import ConfigurationError, NotInitializedError
from .observable import ObservableValue
from .state_provider import StateProvider

logger = logging.getLogger(__name__)

Comparator = Callable[[str, Any, Any], bool]


def default_comparator(key: str, new: Any, old: Any) -> bool:
    """Structural equality; ``key`` is ignored."""
    return new == old


class HistorySnapshot(NamedTuple):
    history: Tuple[Commit, ...]
    position: int


class UndoRedoManager:
    """Manages undo and redo for a set of observed store keys.

    Index 0 of the history always holds an anchor commit (the baseline
    created by :meth:`reset`, or the oldest surviving entry once the
    history is full) which is never undone itself.

    Attributes:
        can_undo: Observable flag, true when :meth:`undo` would do something
        can_redo: Observable flag, true when :meth:`redo` would do something
    """

    def __init__(self, state_provider: StateProvider,
                 observed_keys: Iterable[str],
                 max_size: int = UndoRedoConstants.DEFAULT_HISTORY_SIZE,
                 trigger_keys: Optional[Iterable[str]] = None,
                 comparator: Optional[Comparator] = None,
                 persist_history: bool = False):
        """Configure the manager.

        Args:
            state_provider: Store the snapshots are read from and written to
            observed_keys: Keys included in every snapshot
            max_size: Maximum number of history entries, at least 5
            trigger_keys: Keys whose change records a commit; must be a
                subset of ``observed_keys``. Defaults to all observed keys.
            comparator: ``(key, new, old) -> bool`` returning True when the
                two values should be considered equal
            persist_history: Write the history up to the current position
                back to the store under ``UndoRedoConstants.COMMIT_STACK_KEY``
                after every change

        Raises:
            ConfigurationError: If the history size or key sets are invalid.
        """
        self._observed_keys = frozenset(observed_keys)
        self._trigger_keys = (frozenset(trigger_keys) if trigger_keys is not None
                              else self._observed_keys)

        if max_size < UndoRedoConstants.MIN_HISTORY_SIZE:
            raise ConfigurationError(UndoRedoConstants.MAX_SIZE_TOO_SMALL_MESSAGE.format(
                UndoRedoConstants.MIN_HISTORY_SIZE, max_size))
        if not self._observed_keys:
            raise ConfigurationError("At least one observed key is required")
        unknown = self._trigger_keys - self._observed_keys
        if unknown:
            raise ConfigurationError(
                UndoRedoConstants.UNKNOWN_TRIGGER_KEYS_MESSAGE.format(sorted(unknown)))
        if persist_history and UndoRedoConstants.COMMIT_STACK_KEY in self._observed_keys:
            raise ConfigurationError(
                f"{UndoRedoConstants.COMMIT_STACK_KEY!r} is reserved for the persisted history")

        self._state_provider = state_provider
        self._max_size = max_size
        self._comparator = comparator or default_comparator
        self._persist_history = persist_history
        self._initialized = False

        self._snapshot = HistorySnapshot(history=(), position=-1)
        self.can_undo: ObservableValue[bool] = ObservableValue(False)
        self.can_redo: ObservableValue[bool] = ObservableValue(False)

    @property
    def observed_keys(self) -> frozenset:
        return self._observed_keys

    @property
    def trigger_keys(self) -> frozenset:
        return self._trigger_keys

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def snapshot(self) -> HistorySnapshot:
        """The current ``(history, position)`` pair."""
        return self._snapshot

    @property
    def history(self) -> Tuple[Commit, ...]:
        return self._snapshot.history

    @property
    def position(self) -> int:
        return self._snapshot.position

    def __len__(self) -> int:
        return len(self._snapshot.history)

    def _publish(self, history: Tuple[Commit, ...], position: int) -> None:
        """Replace history and position in one step and refresh the flags."""
        self._snapshot = HistorySnapshot(history, position)
        if self._persist_history:
            # The redo branch is not stored; a restored history resumes at its tip
            self._state_provider.set(UndoRedoConstants.COMMIT_STACK_KEY,
                                     list(history[:position + 1]))
        # Both flags hold their new value before any listener runs
        changed = [flag for flag, value in (
            (self.can_undo, position > 0),
            (self.can_redo, 0 <= position + 1 < len(history)),
        ) if flag._update(value)]
        for flag in changed:
            flag._notify()

    def init(self) -> None:
        """Make the manager ready for commits.

        A history previously stored in the state provider is restored with
        the position on its last entry. Without one, :meth:`reset` creates
        a fresh baseline.
        """
        self._initialized = True
        stored = self._state_provider.get(UndoRedoConstants.COMMIT_STACK_KEY)
        if stored and isinstance(stored, (list, tuple)) \
                and all(isinstance(entry, Commit) for entry in stored):
            history = tuple(stored)[-self._max_size:]
            logger.info(f"init: restored {len(history)} commits")
            self._publish(history, len(history) - 1)
            return
        if stored:
            logger.warning("Stored commit history has an unexpected format, ignoring")
        self.reset()

    def reset(self) -> None:
        """Discard the history and anchor a new one at the current state."""
        baseline = Commit.baseline(self._state_provider.get_all(self._observed_keys))
        self._publish((baseline,), 0)

    def commit(self, action: Optional[CommitAction] = None,
               on_undo: Optional[RevertCallback] = None) -> Optional[Commit]:
        """Record the current store state if a trigger key changed.

        Any redo entries after the current position are discarded before
        the new commit is appended. When the history would exceed
        ``max_size`` the oldest entry is dropped.

        Args:
            action: Called once now and again on every redo. It runs before
                the store is read, so its own effects belong to this commit.
                The return value is cached for ``on_undo``.
            on_undo: Called on undo with the latest ``action`` result.

        Returns:
            The recorded commit, or None if nothing changed.

        Raises:
            NotInitializedError: If :meth:`init` has not been called.
        """
        if not self._initialized:
            raise NotInitializedError(UndoRedoConstants.NOT_INITIALIZED_MESSAGE)

        result = action() if action is not None else None
        current_state = self._state_provider.get_all(self._observed_keys)
        history, position = self._snapshot
        previous_state = history[position].state if 0 <= position < len(history) else {}

        changes = {
            key: value for key, value in current_state.items()
            if key in self._trigger_keys and (
                key not in previous_state
                or not self._comparator(key, value, previous_state[key]))
        }
        if not changes:
            logger.debug("commit: no trigger key changed, nothing recorded")
            return None

        reverted_changes = {key: previous_state[key] for key in changes if key in previous_state}
        commit = Commit(
            state=current_state,
            changes=changes,
            reverted_changes=reverted_changes,
            on_revert=on_undo,
            commit_action=action,
            revert_result=result,
        )
        logger.info(f"commit: {commit}")

        # Truncate the redo branch, then cap from the head
        history = history[:position + 1] + (commit,)
        if len(history) > self._max_size:
            history = history[len(history) - self._max_size:]
        self._publish(history, len(history) - 1)
        return commit

    def undo(self) -> bool:
        """Revert the commit at the current position.

        Previous values are written back to the store, keys the commit
        introduced are removed, and then ``on_revert`` is called. If
        ``on_revert`` raises, the store has already been rewritten but the
        position is left unchanged.

        Returns:
            True if a commit was undone, False if there was nothing to undo.
        """
        history, position = self._snapshot
        if position <= 0:
            logger.debug("undo: nothing to undo")
            return False

        commit = history[position]
        logger.info(f"undo: {commit.reverted_changes}")
        for key, value in commit.reverted_changes.items():
            if key in self._observed_keys:
                self._state_provider.set(key, value)
        for key in commit.changes.keys() - commit.reverted_changes.keys():
            self._state_provider.remove(key)
        if commit.on_revert is not None:
            commit.on_revert(commit.revert_result)
        self._publish(history, position - 1)
        return True

    def redo(self) -> bool:
        """Re-apply the next commit and re-run its action.

        Returns:
            True if a commit was redone, False if there was nothing to redo.
        """
        history, position = self._snapshot
        if not 0 <= position + 1 < len(history):
            logger.debug("redo: nothing to redo")
            return False

        commit = history[position + 1]
        logger.info(f"redo: {commit.changes}")
        for key, value in commit.changes.items():
            self._state_provider.set(key, value)
        if commit.commit_action is not None:
            commit.revert_result = commit.commit_action()
        self._publish(history, position + 1)
        return True
