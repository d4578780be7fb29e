"""Minimal screen hierarchy used to anchor message popups."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True, eq=False)
class Screen:
    """A screen of the host application.

    ``presented`` is the screen shown modally on top of this one, if any.
    """

    name: str
    presented: Optional[Screen] = None


@dataclass(slots=True, eq=False)
class ContainerScreen(Screen):
    """Screen managing a navigable stack of child screens."""

    stack: list[Screen] = field(default_factory=list)

    @property
    def visible_child(self) -> Screen | None:
        return self.stack[-1] if self.stack else None

    def push(self, screen: Screen) -> None:
        self.stack.append(screen)

    def pop(self) -> Screen | None:
        if not self.stack:
            return None
        return self.stack.pop()


def top_most_screen(root: Screen | None) -> Screen | None:
    """Return the screen a popup should be anchored at.

    Starting from ``root`` the chain of presented screens is followed to the
    innermost one. A container found there is replaced by its visible child;
    containers nested inside that child are not unwrapped any further.
    """

    if root is None:
        return None

    top = root
    while top.presented is not None:
        top = top.presented

    if isinstance(top, ContainerScreen):
        return top.visible_child
    return top
