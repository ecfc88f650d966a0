import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from realtime.relay import RelayService, relay_service

from .doubles import MemoryGateway, RecordingDelivery


@pytest.fixture(autouse=True)
def _reset_realtime_state():
    relay_service.registry.clear()
    yield
    relay_service.registry.clear()
    async_to_sync(get_channel_layer().flush)()


@pytest.fixture
def delivery() -> RecordingDelivery:
    return RecordingDelivery()


@pytest.fixture
def gateway() -> MemoryGateway:
    return MemoryGateway()


@pytest.fixture
def relay(delivery, gateway) -> RelayService:
    return RelayService(gateway=gateway, delivery=delivery)
