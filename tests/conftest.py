"""Pytest configuration and shared fixtures."""

import logging
from pathlib import Path

import pytest

from clubportal.config.error_aggregator import init_error_aggregator
from clubportal.config.settings import ConfigurationManager
from clubportal.config.types import ErrorAggregationConfig
from clubportal.portal import ClubPortal
from clubportal.services.seed_service import SeedService
from clubportal.services.storage import MemoryKeyValueStore


class FakeTimer:
    """Timer stand-in that only fires when told to."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function()


class FakeTimerFactory:
    """Records every timer the message service arms."""

    def __init__(self):
        self.timers = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def last(self):
        return self.timers[-1]


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, tmp_path):
    """Point configuration at a temporary directory and reset global state."""
    for name in (
        "CLUBPORTAL_DB_FILE",
        "CLUBPORTAL_SEED_FILE",
        "CLUBPORTAL_MESSAGE_TIMEOUT_MS",
        "CLUBPORTAL_LOG_LEVEL",
        "CLUBPORTAL_LOG_FILE",
        "CLUBPORTAL_LOG_MAX_SIZE",
        "CLUBPORTAL_LOG_BACKUP_COUNT",
    ):
        monkeypatch.delenv(name, raising=False)

    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("CLUBPORTAL_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("CLUBPORTAL_DATA_DIR", str(tmp_path / "data"))

    ConfigurationManager.reset()
    init_error_aggregator(ErrorAggregationConfig())

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    ConfigurationManager.reset()


@pytest.fixture
def config_dir(tmp_path) -> Path:
    return tmp_path / "config"


@pytest.fixture
def seed_records():
    """Small dataset covering a shared category and a views tie."""
    return [
        {"id": 1, "name": "Chess Club", "category": "Games", "bulletin": "Weekly blitz",
         "contact": "chess@example.org", "views": 10},
        {"id": 2, "name": "Checkers Club", "category": "Games", "bulletin": "",
         "contact": "", "views": 5},
        {"id": 3, "name": "Debate Society", "category": "Academic", "bulletin": "Motions on Friday",
         "contact": "debate@example.org", "views": 10},
        {"id": 4, "name": "Robotics Club", "category": "Technology", "bulletin": "Build season",
         "contact": "robots@example.org", "views": 20},
    ]


@pytest.fixture
def seed_service(seed_records):
    return SeedService(records=seed_records)


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def timers():
    return FakeTimerFactory()


@pytest.fixture
def portal(store, seed_service, timers):
    """Portal over an in-memory store with controllable message timers."""
    with ClubPortal(store, seed_service, timer_factory=timers) as portal:
        yield portal


@pytest.fixture
def alice_portal(portal):
    """Portal with Alice (101) logged in."""
    assert portal.login("Alice", "101")
    return portal
