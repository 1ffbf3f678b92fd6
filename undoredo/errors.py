"""Exception types raised by the undo/redo engine."""


class UndoRedoError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(UndoRedoError, ValueError):
    """Invalid constructor arguments (history size, key sets)."""


class NotInitializedError(UndoRedoError, RuntimeError):
    """A commit was attempted before init() was called."""


class StateFileError(UndoRedoError):
    """A state file could not be read in strict mode."""
