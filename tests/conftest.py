import pytest

import backend.config as config
from backend.core.descriptor_builder import FrameDescriptorBuilder
from backend.core.frame_machine import FrameMachine

HOST = "https://frame.test"
WALLET = "0x1111111111111111111111111111111111111111"


@pytest.fixture(autouse=True)
def _quiet_config(monkeypatch):
    # Keep tests deterministic regardless of a developer's .env.
    monkeypatch.setattr(config, "DEBUG", False)
    monkeypatch.setattr(config, "ZAPPER_API_KEY", None)


@pytest.fixture
def builder():
    return FrameDescriptorBuilder(host=HOST)


@pytest.fixture
def machine(builder):
    return FrameMachine(builder=builder, wallet_address=WALLET)
