# tests/conftest.py
import json
import os

import pytest

EVENTS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'events')


def read_event(name: str) -> dict:
    with open(os.path.join(EVENTS_DIR, f"{name}.json"), 'r') as f:
        return json.load(f)


@pytest.fixture
def ecr_image_action() -> dict:
    """The ECR push event from the AWS EventBridge docs."""
    return read_event('ecr_image_action')


@pytest.fixture
def ecr_image_scan() -> dict:
    return read_event('ecr_image_scan')
