# -*- coding: utf-8 -*-
"""
Shared fixtures for the discovery engine tests.
"""
import sys
import time
from pathlib import Path

import pytest
from PyQt5.QtCore import QCoreApplication

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from services.task_runner import TaskRunner


# Manhattan test catalog: "1" and "2" are plottable, "3" has no coordinates.
PROPERTY_PAYLOADS = [
    {"id": "1", "name": "Times Square Tower", "address": "7 Times Square",
     "city": "New York", "state": "NY", "latitude": 40.0, "longitude": -74.0,
     "propertyType": "OFFICE"},
    {"id": "2", "name": "Empire Plaza", "address": "350 5th Ave",
     "city": "New York", "state": "NY", "location": {"latitude": 40.7484, "longitude": -73.9857},
     "propertyType": "RETAIL"},
    {"id": "3", "name": "Unknown Site", "latitude": None, "longitude": None},
]

AREA_PAYLOADS = {
    "1": [
        {"id": "a1", "name": "North Facade Billboard", "type": "billboard",
         "baseRate": 300, "rateType": "DAILY", "latitude": 40.001, "longitude": -74.0},
        {"id": "a2", "name": "Lobby Digital Display", "type": "digital_display",
         "baseRate": 4200, "rateType": "WEEKLY"},
    ],
    "2": [
        {"id": "b1", "name": "Rooftop Sign", "type": "billboard", "baseRate": 900},
    ],
}


class DeferredTaskRunner(TaskRunner):
    """
    Task runner that queues tasks until the test releases them.

    Lets tests decide the order in which async loads complete.
    """

    def __init__(self):
        self.queue = []

    def submit(self, name, func, on_done, token):
        self.queue.append((name, func, on_done, token))

    def names(self):
        return [item[0] for item in self.queue]

    def tags(self):
        return [item[3].tag for item in self.queue]

    def run(self, index: int = 0):
        name, func, on_done, token = self.queue.pop(index)
        self._deliver(name, self._execute(name, func), on_done, token)

    def run_tag(self, tag):
        self.run(self.tags().index(tag))

    def run_all(self):
        while self.queue:
            self.run()


@pytest.fixture(scope="session")
def qapp():
    """Create QCoreApplication for tests."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def wait_until(qapp):
    """Pump the Qt event loop until a condition holds (or time runs out)."""
    def _wait(predicate, timeout: float = 5.0) -> bool:
        deadline = time.monotonic() + timeout
        while not predicate() and time.monotonic() < deadline:
            qapp.processEvents()
            time.sleep(0.01)
        return predicate()
    return _wait


@pytest.fixture
def property_payloads():
    return [dict(item) for item in PROPERTY_PAYLOADS]


@pytest.fixture
def area_payloads():
    return {key: [dict(item) for item in value] for key, value in AREA_PAYLOADS.items()}


@pytest.fixture
def deferred_runner():
    return DeferredTaskRunner()
