"""Outline navigation for the "on this page" table of contents."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from .constants import OUTLINE_BASE_PADDING, OUTLINE_LEVEL_PADDING
from .models import HeadingEntry

ElementLocator = Callable[[str], Any]
ScrollIntoView = Callable[[Any], None]


class NavigatorState(Enum):
    """Outline navigator states.

    Attributes:
        IDLE: No outline entry has been activated yet.
        FOCUSED: An entry has been activated; its id is highlighted.
    """

    IDLE = auto()
    FOCUSED = auto()


@dataclass(frozen=True)
class OutlineEntry:
    """Row of the rendered outline.

    Attributes:
        text: Heading text.
        level: Heading level, 1 to 3.
        id: Anchor id of the heading.
        padding: Left padding in pixels.
        active: Whether the row is the highlighted heading.
    """

    text: str
    level: int
    id: str
    padding: int
    active: bool


def outline_padding(level: int) -> int:
    return (level - 1) * OUTLINE_LEVEL_PADDING + OUTLINE_BASE_PADDING


class OutlineNavigator:
    """Track the highlighted outline entry and scroll to headings.

    The active heading only changes through `activate`; it is never derived
    from the scroll position.

    Args:
        headings: Headings extracted from the current document.
        locate: Returns the rendered element for an id, or None.
        scroll_into_view: Smoothly scrolls an element to the top of the view.
    """

    def __init__(
        self,
        headings: Sequence[HeadingEntry],
        locate: ElementLocator,
        scroll_into_view: ScrollIntoView,
    ):
        self.headings = list(headings)
        self._locate = locate
        self._scroll_into_view = scroll_into_view
        self.state = NavigatorState.IDLE
        self.active_id: str | None = None

    def activate(self, heading_id: str) -> bool:
        """Scroll to the heading with `heading_id` and highlight it.

        When no rendered element carries the id, nothing scrolls and the state
        is left untouched.

        Returns:
            bool: True when the heading was found and focused.
        """
        element = self._locate(heading_id)
        if element is None:
            return False

        self._scroll_into_view(element)
        self.state = NavigatorState.FOCUSED
        self.active_id = heading_id
        return True

    def entries(self) -> Iterator[OutlineEntry]:
        for heading in self.headings:
            yield OutlineEntry(
                text=heading.text,
                level=heading.level,
                id=heading.id,
                padding=outline_padding(heading.level),
                active=self.state is NavigatorState.FOCUSED and heading.id == self.active_id,
            )
