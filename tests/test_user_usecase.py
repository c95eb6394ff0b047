import uuid

import pytest

from auctionhouse.entities import User
from auctionhouse.errors import InternalError, not_found_error
from auctionhouse.user_usecase import UserOutput, UserUseCase


class FakeUserRepository:
    def __init__(self, users):
        self.users = {u.id: u for u in users}

    def find_user_by_id(self, user_id):
        try:
            return self.users[user_id]
        except KeyError:
            raise not_found_error(f"User not found with this id = {user_id}") from None


def test_find_user_by_id():
    user = User(id=str(uuid.uuid4()), name="Alice")
    uc = UserUseCase(FakeUserRepository([user]))
    found = uc.find_user_by_id(user.id)
    assert found == UserOutput(id=user.id, name="Alice")
    assert found.to_dict() == {"id": user.id, "name": "Alice"}


def test_find_missing_user_propagates_not_found():
    uc = UserUseCase(FakeUserRepository([]))
    missing = str(uuid.uuid4())
    with pytest.raises(InternalError) as info:
        uc.find_user_by_id(missing)
    assert info.value.err == "not_found"
    assert missing in str(info.value)