"""JSON file-backed state store.

The whole key space is kept as one JSON document in an OS-appropriate data
directory, so values (and a persisted commit history) survive application
restarts.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

import platformdirs

from .commit import Commit
from .constants import UndoRedoConstants
from .errors import StateFileError
from .state_provider import StateProvider
from .text_field import TextFieldValue

logger = logging.getLogger(__name__)

_TEXT_FIELD_MARKER = "__text_field__"


def _encode(value: Any) -> Any:
    """``json.dump`` hook for the value types the engine stores."""
    if isinstance(value, Commit):
        data = value.to_dict()
        try:
            json.dumps(data["revert_result"], default=_encode)
        except (TypeError, ValueError):
            # Action results that cannot be stored are dropped, not the commit
            data["revert_result"] = None
        return {UndoRedoConstants.COMMIT_MARKER: data}
    if isinstance(value, TextFieldValue):
        return {_TEXT_FIELD_MARKER: value.to_dict()}
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _decode(obj: Dict[str, Any]) -> Any:
    """``json.load`` object hook undoing :func:`_encode`."""
    if len(obj) == 1:
        if UndoRedoConstants.COMMIT_MARKER in obj:
            return Commit.from_dict(obj[UndoRedoConstants.COMMIT_MARKER])
        if _TEXT_FIELD_MARKER in obj:
            return TextFieldValue.from_dict(obj[_TEXT_FIELD_MARKER])
    return obj


def default_state_path() -> Path:
    """Location used when no explicit state file is given."""
    data_dir = Path(platformdirs.user_data_dir(
        UndoRedoConstants.APP_NAME, UndoRedoConstants.APP_AUTHOR))
    return data_dir / UndoRedoConstants.STATE_FILE_NAME


class JsonFileStateProvider(StateProvider):
    """Stores all keys in a single JSON file.

    The document is loaded lazily and cached. With ``autoflush`` every
    ``set``/``remove`` rewrites the file atomically; otherwise call
    :meth:`flush` explicitly. Tuples are stored as JSON arrays and come
    back as lists.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None,
                 autoflush: bool = True, strict: bool = False):
        """Initialize the store.

        Args:
            path: State file location; defaults to the user data directory
            autoflush: Write the file after every mutation
            strict: Raise StateFileError instead of starting empty when the
                file exists but cannot be read
        """
        self._path = Path(path) if path is not None else default_state_path()
        self._autoflush = autoflush
        self._strict = strict
        self._cache: Optional[Dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, Any]:
        if self._cache is not None:
            return self._cache

        if not self._path.exists():
            self._cache = {}
            return self._cache

        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f, object_hook=_decode)
        except (json.JSONDecodeError, OSError) as e:
            if self._strict:
                raise StateFileError(f"Could not load state from {self._path}: {e}") from e
            logger.warning(f"Could not load state from {self._path}: {e}")
            self._cache = {}
            return self._cache

        if not isinstance(data, dict):
            if self._strict:
                raise StateFileError(f"State file {self._path} is not a JSON object")
            logger.warning("State file has invalid format (not a dict), ignoring")
            data = {}

        self._cache = data
        return self._cache

    def flush(self) -> bool:
        """Write the cached document to disk atomically.

        Returns:
            True if the write succeeded, False otherwise.
        """
        data = self._load()
        temp_file = self._path.with_suffix('.tmp')

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, default=_encode)
            temp_file.replace(self._path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not save state to {self._path}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._load()[key] = value
        if self._autoflush:
            self.flush()

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        if self._autoflush:
            self.flush()

    def keys(self) -> Iterator[str]:
        return iter(list(self._load().keys()))

    def __contains__(self, key: object) -> bool:
        return key in self._load()

    def clear_cache(self) -> None:
        """Drop the in-memory copy so the next read goes to disk."""
        self._cache = None
