"""Generation-counted writer for the screen title."""

from dataclasses import dataclass
from typing import Protocol


class TitleSink(Protocol):
    """Interface for displaying the screen title."""

    def set_title(self, text: str) -> None:
        """Show a new title."""


@dataclass
class TitleController:
    """Writes titles and tracks how many times the title changed."""

    sink: TitleSink
    generation: int = 0

    def set_title(self, text: str) -> int:
        """Show a title and return the new generation."""
        self.generation += 1
        self.sink.set_title(text)
        return self.generation

    def restore_if_current(self, generation: int, text: str) -> bool:
        """Show text only if no title change happened since generation."""
        if generation != self.generation:
            return False
        self.set_title(text)
        return True
