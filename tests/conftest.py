import random

import pytest

from ping_pong.session import Session
from ping_pong.settings import flat_rules, table_rules


@pytest.fixture
def rng():
    return random.Random(7)


@pytest.fixture
def flat():
    return flat_rules()


@pytest.fixture
def table():
    return table_rules()


@pytest.fixture
def session(flat, rng):
    return Session(flat, rng=rng)


@pytest.fixture
def table_session(table, rng):
    return Session(table, rng=rng)
