"""Tie-break policies for namespaces matched by more than one group profile."""

from __future__ import annotations

from typing import Callable, Sequence

from crdswagger.types import GroupNamingProfile

__all__ = ["TieBreakPolicy", "longest_group_label"]

TieBreakPolicy = Callable[[Sequence[GroupNamingProfile]], GroupNamingProfile]


def longest_group_label(candidates: Sequence[GroupNamingProfile]) -> GroupNamingProfile:
    """Pick the candidate with the longest group label.

    A shared prefix can itself be a sub-path of another group's prefix, so a
    namespace may match several profiles. The longer label is usually the more
    specific group (``batch.apps.example.com`` over ``example.com``). This is a
    heuristic; equal lengths keep the first candidate in the given order.
    """
    if not candidates:
        raise ValueError("No candidate profiles to choose from")
    return max(candidates, key=lambda profile: len(profile.group))
