"""Argument models for the tool catalog.

Every tool argument arrives as a string, even numeric ones, and is
checked against a regular expression before anything touches the
editor.  The models' JSON schemas are published as the tools'
``inputSchema``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

PAGE_NUMBER_PATTERN = r"^[1-9][0-9]*$"
COLOR_PATTERN = r"^[1-8]$"
COORDINATE_PATTERN = r"^[0-9]+$"


class ToolArguments(BaseModel):
    """Base for argument models: strings only, no unknown keys."""

    model_config = ConfigDict(extra="forbid", strict=True)


class NoArguments(ToolArguments):
    pass


class MoveToPageArguments(ToolArguments):
    pageNumber: str = Field(
        pattern=PAGE_NUMBER_PATTERN,
        description="1-based page number to display, e.g. \"3\".",
    )

    @property
    def page_number(self) -> int:
        return int(self.pageNumber)


class SetColorArguments(ToolArguments):
    color: str = Field(
        pattern=COLOR_PATTERN,
        description=(
            "Drawing color code: 1=I, 2=L, 3=O, 4=Z, 5=T, 6=J, 7=S, 8=garbage (X)."
        ),
    )

    @property
    def code(self) -> int:
        return int(self.color)


class DrawPixelArguments(ToolArguments):
    x: str = Field(pattern=COORDINATE_PATTERN, description="Column, 0 (left) to 9.")
    y: str = Field(pattern=COORDINATE_PATTERN, description="Row, 0 (top) to 19.")

    @property
    def column(self) -> int:
        return int(self.x)

    @property
    def row(self) -> int:
        return int(self.y)
