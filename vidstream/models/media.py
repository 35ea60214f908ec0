from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MediaEntry:
    name: str
    size: int

    def to_dict(self) -> dict:
        return {"name": self.name, "size": self.size}


@dataclass(frozen=True)
class RangeRequest:
    start_raw: Optional[int]
    end_raw: Optional[int]


@dataclass(frozen=True)
class ResolvedRange:
    # 0 <= start <= end <= total - 1
    start: int
    end: int
    total: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end}/{self.total}"
