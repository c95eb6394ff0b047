"""User lookups."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class UserOutput:
    """A user as returned to API clients."""

    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class UserUseCase:
    """Looks users up through a user repository."""

    def __init__(self, user_repository: Any) -> None:
        self.user_repository = user_repository

    def find_user_by_id(self, user_id: str) -> UserOutput:
        user = self.user_repository.find_user_by_id(user_id)
        return UserOutput(id=user.id, name=user.name)