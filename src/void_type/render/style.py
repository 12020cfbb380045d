"""Colour theme for Void renders."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Colour palette applied to renders and exports."""

    name: str
    color: str
    background_color: str
    grid_color: str
