"""Offset/size pagination as the API receives it."""

from dataclasses import dataclass

from shareit.core.exceptions import ValidationError


@dataclass(frozen=True)
class Page:
    """A window of `size` rows requested from record `offset`.

    The window is page-aligned: the effective page index is offset // size
    and rows are read from index * size.
    """

    offset: int = 0
    size: int = 10

    def __post_init__(self) -> None:
        if self.offset < 0 or self.size <= 0:
            raise ValidationError(
                f"Invalid pagination: from={self.offset}, size={self.size}"
            )

    @property
    def index(self) -> int:
        return self.offset // self.size

    @property
    def start(self) -> int:
        return self.index * self.size
