"""History entries recorded by the undo/redo engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional


RevertCallback = Callable[[Any], None]
CommitAction = Callable[[], Any]


@dataclass
class Commit:
    """One recorded transition of the observed state.

    Attributes:
        state: Full snapshot of every observed key at commit time
        changes: Trigger keys whose value differs from the previous commit
        reverted_changes: Previous values for the keys in ``changes``
        on_revert: Called on undo with the cached ``revert_result``
        commit_action: Re-run on every redo; its result is cached
        revert_result: Most recent return value of ``commit_action``
    """
    state: Dict[str, Any]
    changes: Dict[str, Any]
    reverted_changes: Dict[str, Any]
    on_revert: Optional[RevertCallback] = field(default=None, repr=False, compare=False)
    commit_action: Optional[CommitAction] = field(default=None, repr=False, compare=False)
    revert_result: Any = None

    def __post_init__(self):
        # Never share dicts with the caller or the store
        self.state = dict(self.state)
        self.changes = dict(self.changes)
        self.reverted_changes = dict(self.reverted_changes)

    @classmethod
    def baseline(cls, state: Dict[str, Any]) -> 'Commit':
        """Create the diff anchor placed at the start of a fresh history."""
        return cls(state=state, changes={}, reverted_changes={})

    @property
    def is_baseline(self) -> bool:
        return not self.changes

    def to_dict(self) -> Dict[str, Any]:
        """Return a serialisable form of this commit.

        Callbacks cannot be stored, so a commit restored from this form
        replays store values only.
        """
        return {
            "state": dict(self.state),
            "changes": dict(self.changes),
            "reverted_changes": dict(self.reverted_changes),
            "revert_result": self.revert_result,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Commit':
        return cls(
            state=data.get("state", {}),
            changes=data.get("changes", {}),
            reverted_changes=data.get("reverted_changes", {}),
            revert_result=data.get("revert_result"),
        )
