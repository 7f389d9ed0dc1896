import random
from datetime import datetime

import pytest


class MemoryKeyValueStore:
    """
    In-memory KeyValueStore that records every write.
    Set `fail_writes` to make the setters report failure.
    """

    def __init__(self):
        self.data = {}
        self.writes = []
        self.fail_writes = False

    async def get_string_list(self, key):
        return list(self.data.get(key, []))

    async def set_string_list(self, key, values):
        if self.fail_writes:
            return False
        self.writes.append(key)
        self.data[key] = list(values)
        return True

    async def get_string(self, key):
        return self.data.get(key)

    async def set_string(self, key, value):
        if self.fail_writes:
            return False
        self.writes.append(key)
        self.data[key] = value
        return True


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


# 2024-06-12 is a Wednesday, 2024-06-16 the following Sunday
WEDNESDAY = datetime(2024, 6, 12, 10, 30)
SUNDAY = datetime(2024, 6, 16, 9, 0)


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def clock():
    return FakeClock(WEDNESDAY)


@pytest.fixture
def rng():
    return random.Random(1234)
