import pytest
from pymongo.errors import PyMongoError

from auctionhouse.entities import User
from auctionhouse.errors import InternalError
from auctionhouse.user_repository import UserRepository


class FakeCollection:
    def __init__(self):
        self.documents = {}
        self.failing = False

    def find_one(self, query):
        if self.failing:
            raise PyMongoError("storage unavailable")
        document = self.documents.get(query["_id"])
        return dict(document) if document is not None else None


class FakeDatabase(dict):
    def __missing__(self, name):
        collection = self[name] = FakeCollection()
        return collection


USER_ID = "6a7b8c9d-0000-4000-8000-000000000001"


@pytest.fixture
def database():
    db = FakeDatabase()
    db["users"].documents[USER_ID] = {"_id": USER_ID, "name": "Ada"}
    return db


def test_finds_user(database):
    user = UserRepository(database).find_user_by_id(USER_ID)
    assert user == User(id=USER_ID, name="Ada")


def test_missing_user_is_not_found(database):
    missing = "6a7b8c9d-0000-4000-8000-000000000002"
    with pytest.raises(InternalError) as info:
        UserRepository(database).find_user_by_id(missing)
    assert info.value.err == "not_found"
    assert missing in info.value.message
    assert info.value.message.startswith("User not found with this id = ")


def test_storage_failure_is_internal_error(database):
    database["users"].failing = True
    with pytest.raises(InternalError) as info:
        UserRepository(database).find_user_by_id(USER_ID)
    assert info.value.err == "internal_server_error"
    assert info.value.message == "Error trying to find user by userId"