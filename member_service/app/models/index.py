from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Index:
    """화면에 보이는 회원 목록의 위치. 내부에서는 0부터 센다."""

    zero_based: int

    def __post_init__(self) -> None:
        if self.zero_based < 0:
            raise IndexError("index must not be negative")

    @classmethod
    def from_one_based(cls, value: int) -> "Index":
        return cls(value - 1)

    @property
    def one_based(self) -> int:
        return self.zero_based + 1
