from dataclasses import dataclass, field
from typing import List, Literal

Level = Literal["success", "error"]


@dataclass(frozen=True)
class Notification:
    level: Level
    message: str


@dataclass
class Toaster:
    """Transient toast messages for one form session; nothing is persisted."""
    items: List[Notification] = field(default_factory=list)

    def success(self, message: str) -> None:
        self.items.append(Notification("success", message))

    def error(self, message: str) -> None:
        self.items.append(Notification("error", message))

    @property
    def last(self) -> Notification | None:
        return self.items[-1] if self.items else None
