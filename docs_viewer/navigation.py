"""Breadcrumb and parent-folder navigation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from .constants import ROOT_NAME
from .filesystem import normalize_relative_path


@dataclass(frozen=True)
class Breadcrumb:
    """One step of the breadcrumb trail.

    Attributes:
        name: Display name.
        path: POSIX path relative to the docs root; empty for the root.
        current: Whether this crumb is the page being shown.
    """

    name: str
    path: str
    current: bool = False


def build_breadcrumbs(relative_path: str) -> list[Breadcrumb]:
    """Build the breadcrumb trail from the root to `relative_path`.

    Examples:
        build_breadcrumbs("guides/setup.md")
        # [Breadcrumb("Docs", ""), Breadcrumb("guides", "guides"),
        #  Breadcrumb("setup.md", "guides/setup.md", current=True)]
    """
    relative_path = normalize_relative_path(relative_path)
    parts = PurePosixPath(relative_path).parts if relative_path else ()

    crumbs = [Breadcrumb(name=ROOT_NAME, path="", current=not parts)]
    for depth, part in enumerate(parts, start=1):
        crumbs.append(
            Breadcrumb(
                name=part,
                path="/".join(parts[:depth]),
                current=depth == len(parts),
            )
        )
    return crumbs


def parent_of(relative_path: str) -> Breadcrumb | None:
    """Return the crumb one level up, or None at the root.

    Examples:
        parent_of("guides/setup.md")  # Breadcrumb("guides", "guides")
        parent_of("")  # None
    """
    crumbs = build_breadcrumbs(relative_path)
    if len(crumbs) < 2:
        return None
    parent = crumbs[-2]
    return Breadcrumb(name=parent.name, path=parent.path)
