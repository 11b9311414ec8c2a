"""Shared fixtures: a seeded in-memory store and a repository bound to it."""

import pytest

from fakes import FakeSupabase
from talkstore import TalkRepository


@pytest.fixture
def store():
    fake = FakeSupabase()
    fake.add_speaker("speakers/ada", "Ada Lovelace")
    fake.add_speaker("speakers/grace", "Grace Hopper")
    return fake


@pytest.fixture
def repository(store):
    return TalkRepository(session_factory=store.session)
