"""Text input values with caret/selection state.

Editing widgets report the caret position together with the text. Moving
the caret alone should not create an undo step, which is what
:func:`text_only_comparator` is for.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TextRange:
    start: int = 0
    end: int = 0

    @property
    def collapsed(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class TextFieldValue:
    """Text plus selection and optional IME composition range."""
    text: str = ""
    selection: TextRange = TextRange()
    composition: Optional[TextRange] = None

    @classmethod
    def from_text(cls, text: str) -> 'TextFieldValue':
        """Value with the caret placed after the last character."""
        return cls(text, TextRange(len(text), len(text)))

    def is_empty(self) -> bool:
        return not self.text

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "text": self.text,
            "selection": [self.selection.start, self.selection.end],
        }
        if self.composition is not None:
            data["composition"] = [self.composition.start, self.composition.end]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TextFieldValue':
        selection = TextRange(*data.get("selection", (0, 0)))
        composition = data.get("composition")
        return cls(
            text=data.get("text", ""),
            selection=selection,
            composition=TextRange(*composition) if composition is not None else None,
        )


def text_only_comparator(key: str, new: Any, old: Any) -> bool:
    """Treat text field values as equal when only the caret moved."""
    if isinstance(new, TextFieldValue) and isinstance(old, TextFieldValue):
        return new.text == old.text
    return new == old
