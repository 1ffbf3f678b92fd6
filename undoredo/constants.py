"""Constants and configuration for the undo/redo engine."""

class UndoRedoConstants:
    """Central configuration constants for the engine."""
    
    # History bounds
    MIN_HISTORY_SIZE = 5  # Smaller histories are rejected at construction
    DEFAULT_HISTORY_SIZE = 100
    
    # Store key under which a persisted commit history lives
    COMMIT_STACK_KEY = "commit stack"
    
    # File-backed store
    APP_NAME = "undoredo"
    APP_AUTHOR = "undoredo"
    STATE_FILE_NAME = "state.json"
    COMMIT_MARKER = "__commit__"  # Tags encoded commits inside the JSON document
    
    # Status messages
    MAX_SIZE_TOO_SMALL_MESSAGE = "The minimum size is {}; you passed {}"
    UNKNOWN_TRIGGER_KEYS_MESSAGE = "These keys: {} are not included in the observed keys"
    NOT_INITIALIZED_MESSAGE = "Please call init() before commit()"
