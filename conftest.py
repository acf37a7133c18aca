"""Shared fixtures for mudscript tests."""

from datetime import datetime, timedelta
from typing import Generator
import pytest
from mudscript.lib.events import EventHub
from mudscript.lib.variables import GlobalVariables


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.current: datetime = start

    def now(self) -> datetime:
        return self.current

    def tick(self, seconds: int = 1) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2021, 11, 12, 20, 15, 2))


@pytest.fixture
def hub() -> EventHub:
    return EventHub()


@pytest.fixture
def store(hub: EventHub, clock: FakeClock) -> Generator[GlobalVariables, None, None]:
    variables = GlobalVariables(events=hub, clock=clock)
    yield variables
    variables.close()
