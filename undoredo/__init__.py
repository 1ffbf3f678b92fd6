"""Undoredo - commit-based undo/redo over a key-value store."""

from .commit import Commit
from .errors import ConfigurationError, NotInitializedError, StateFileError, UndoRedoError
from .file_provider import JsonFileStateProvider
from .manager import HistorySnapshot, UndoRedoManager, default_comparator
from .observable import ObservableValue
from .state_provider import DictStateProvider, MappingStateProvider, StateProvider
from .text_field import TextFieldValue, TextRange, text_only_comparator

__all__ = [
    'Commit',
    'ConfigurationError',
    'DictStateProvider',
    'HistorySnapshot',
    'JsonFileStateProvider',
    'MappingStateProvider',
    'NotInitializedError',
    'ObservableValue',
    'StateFileError',
    'StateProvider',
    'TextFieldValue',
    'TextRange',
    'UndoRedoError',
    'UndoRedoManager',
    'default_comparator',
    'text_only_comparator',
]
