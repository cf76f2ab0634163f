"""
Shared fixtures for the capture -> classify pipeline.
"""
import pytest
from fakes import FakeCamera, FakeTrigger, FakeVision, RecordingSink

from landmark_lens.orchestrator.state_machine import Orchestrator
from landmark_lens.services.capture_service import CaptureService
from landmark_lens.services.classification_client import ClassificationClient
from landmark_lens.services.status_store import StatusStore


@pytest.fixture
def status():
    return StatusStore()


@pytest.fixture
def camera():
    return FakeCamera()


@pytest.fixture
def vision():
    return FakeVision()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def trigger():
    return FakeTrigger()


@pytest.fixture
def orchestrator(camera, vision, sink, status, trigger):
    orch = Orchestrator(
        capture=CaptureService(camera, status),
        classifier=ClassificationClient(vision, status),
        sink=sink,
        status_store=status,
        triggers=[trigger],
    )
    orch.start()
    yield orch
    orch.shutdown()
