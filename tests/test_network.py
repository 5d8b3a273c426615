"""Tests for the simulated network layer."""

import asyncio

import pytest

from edufortune.content.catalog import ContentCatalog
from edufortune.errors import NetworkError, UnknownCourseError
from edufortune.models.course import Course
from edufortune.network.simulated import SimulatedNetwork


@pytest.fixture
def catalog():
    return ContentCatalog([Course(id="premium", title="Premium", is_unlocked=False)])


async def test_download_unlocks_after_delay(catalog):
    network = SimulatedNetwork(catalog, download_latency=0.01, timeout=1.0)
    course = await network.download_course("premium")
    assert course.is_unlocked is True
    assert catalog.get_course("premium").is_unlocked is True
    assert network.is_loading is False


async def test_download_timeout_raises_network_error(catalog):
    network = SimulatedNetwork(catalog, download_latency=1.0, timeout=0.01)
    with pytest.raises(NetworkError):
        await network.download_course("premium")
    assert catalog.get_course("premium").is_unlocked is False
    assert network.is_loading is False


async def test_cancelled_download_leaves_course_locked(catalog):
    network = SimulatedNetwork(catalog, download_latency=5.0, timeout=10.0)
    task = asyncio.create_task(network.download_course("premium"))
    await asyncio.sleep(0.01)
    assert network.is_loading is True
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert catalog.get_course("premium").is_unlocked is False
    assert network.is_loading is False


async def test_download_unknown_course(catalog):
    network = SimulatedNetwork(catalog, download_latency=0.0)
    with pytest.raises(UnknownCourseError):
        await network.download_course("missing")


async def test_sync(catalog):
    network = SimulatedNetwork(catalog, sync_latency=0.01)
    await network.sync_with_server()
    assert network.is_loading is False


async def test_sync_timeout(catalog):
    network = SimulatedNetwork(catalog, sync_latency=1.0, timeout=0.01)
    with pytest.raises(NetworkError):
        await network.sync_with_server()
