import asyncio

import pytest

from curiosity.core.background_tasks import BackgroundTaskManager, get_background_manager


@pytest.mark.asyncio
async def test_task_runs_after_caller_continues():
    manager = BackgroundTaskManager()
    order = []

    async def job():
        order.append("job")

    manager.create_task(job(), name="job")
    order.append("caller")
    await manager.drain()

    assert order == ["caller", "job"]
    assert manager.active_count == 0


@pytest.mark.asyncio
async def test_failures_are_contained():
    manager = BackgroundTaskManager()

    async def broken():
        raise RuntimeError("nope")

    manager.create_task(broken(), name="broken")
    await manager.drain()

    assert not manager.has_tasks


@pytest.mark.asyncio
async def test_shutdown_cancels_stragglers():
    manager = BackgroundTaskManager()

    manager.create_task(asyncio.sleep(10), name="slow")
    await manager.shutdown(timeout=0.05)

    assert not manager.has_tasks


def test_global_manager_is_shared():
    assert get_background_manager() is get_background_manager()
