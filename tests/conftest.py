"""Test configuration and fixtures."""
import json
import random

import pytest
from fastapi.testclient import TestClient

from app import create_app
from registry import RoomRegistry
from relay import SessionRouter
from session import Session


def drain(session):
    """Pop every queued outbound frame from a session, decoded to dicts."""
    frames = []
    while not session.outbox.empty():
        frames.append(json.loads(session.outbox.get_nowait()))
    return frames


class SequenceRandom(random.Random):
    """Random source that returns pre-set values from randint."""

    def __init__(self, values):
        super().__init__()
        self.values = list(values)

    def randint(self, a, b):
        return self.values.pop(0)


@pytest.fixture
def registry():
    return RoomRegistry(rng=random.Random(1234))


@pytest.fixture
def router(registry):
    return SessionRouter(registry)


@pytest.fixture
def make_session():
    counter = iter(range(1000))

    def factory():
        return Session(session_id=f"s{next(counter)}")

    return factory


@pytest.fixture
def app(registry):
    return create_app(registry=registry)


@pytest.fixture
def client(app):
    # One portal (event loop) shared by every websocket opened in a test
    with TestClient(app) as test_client:
        yield test_client
