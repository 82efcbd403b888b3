"""
Tests for core/scheduler.py - timer + consumer wiring (integration)
"""
import asyncio

import pytest

from core.message_bus import MessageBus
from core.poll_channel import PollChannel
from core.registry import ChannelState
from core.scheduler import PollScheduler
from core.settings import SettingsStore
from core.state_tracker import StateTracker
from twitchapi.monitors.poll_worker import PollWorker


def build(settings, transport):
    channel = PollChannel()
    tracker = StateTracker(MessageBus())
    worker = PollWorker(settings, channel, transport_factory=lambda c, m, t: transport)
    return PollScheduler(settings, worker, tracker, channel), tracker, worker, channel


async def settle(tracker, cycles):
    for _ in range(200):
        if tracker.cycles >= cycles:
            return
        await asyncio.sleep(0.005)
    raise AssertionError(f"only {tracker.cycles} cycle(s) applied")


@pytest.mark.integration
class TestPollScheduler:

    @pytest.mark.asyncio
    async def test_first_cycle_runs_immediately(self, settings, fake_transport):
        transport = fake_transport(["alpha", "beta", "gamma"], live=["beta"])
        scheduler, tracker, _, _ = build(settings, transport)

        await scheduler.start()
        await settle(tracker, 1)
        await scheduler.stop()

        assert tracker.registry.online() == ["beta"]

    @pytest.mark.asyncio
    async def test_timer_drives_following_cycles(self, mock_config, fake_transport):
        mock_config["monitoring"]["polling_interval"] = 0.01
        settings = SettingsStore(mock_config)
        transport = fake_transport(["alpha", "beta", "gamma"], live=["alpha"])
        scheduler, tracker, worker, _ = build(settings, transport)

        await scheduler.start()
        await settle(tracker, 3)
        await scheduler.stop()

        assert worker.cycles_started >= 3
        assert tracker.registry.online() == ["alpha"]

    @pytest.mark.asyncio
    async def test_tick_skipped_while_cycle_in_flight(self, settings, fake_transport):
        gate = asyncio.Event()
        transport = fake_transport(["alpha"], live=["alpha"])
        original_get = transport.get

        async def slow_get(resource, params):
            await gate.wait()
            return await original_get(resource, params)

        transport.get = slow_get
        scheduler, tracker, worker, _ = build(settings, transport)

        await scheduler.start()
        assert scheduler.fire() is None
        assert scheduler.skipped == 1
        assert worker.cycles_started == 1

        gate.set()
        await settle(tracker, 1)
        assert scheduler.fire() is not None
        await settle(tracker, 2)
        await scheduler.stop()

    @pytest.mark.asyncio
    async def test_overlap_allowed_when_configured(self, mock_config, fake_transport):
        mock_config["monitoring"]["skip_overlapping"] = False
        settings = SettingsStore(mock_config)
        gate = asyncio.Event()
        transport = fake_transport(["alpha"], live=["alpha"])
        original_get = transport.get

        async def slow_get(resource, params):
            await gate.wait()
            return await original_get(resource, params)

        transport.get = slow_get
        scheduler, tracker, worker, _ = build(settings, transport)

        await scheduler.start()
        assert scheduler.fire() is not None
        gate.set()
        await settle(tracker, 2)
        await scheduler.stop()

        assert worker.cycles_started == 2
        assert tracker.registry.online() == ["alpha"]

    @pytest.mark.asyncio
    async def test_monitoring_changes_apply_without_restart(self, settings, fake_transport):
        gate = asyncio.Event()
        transport = fake_transport(["alpha"], live=["alpha"])
        original_get = transport.get

        async def slow_get(resource, params):
            await gate.wait()
            return await original_get(resource, params)

        transport.get = slow_get
        scheduler, tracker, worker, _ = build(settings, transport)

        await scheduler.start()
        assert scheduler.fire() is None

        settings.set("monitoring.skip_overlapping", False)
        settings.set("monitoring.polling_interval", 30)
        assert scheduler.interval == 30
        assert scheduler.fire() is not None

        gate.set()
        await settle(tracker, 2)
        await scheduler.stop()

        assert worker.cycles_started == 2

    @pytest.mark.asyncio
    async def test_stop_closes_channel_and_is_idempotent(self, settings, fake_transport):
        scheduler, tracker, _, channel = build(settings, fake_transport(["alpha"], live=[]))

        await scheduler.start()
        await settle(tracker, 1)
        await scheduler.stop()
        await scheduler.stop()

        assert channel.closed
        assert not scheduler.running

    @pytest.mark.asyncio
    async def test_prune_removed_channels(self, mock_config, fake_transport):
        mock_config["monitoring"]["prune_removed_channels"] = True
        settings = SettingsStore(mock_config)
        transport = fake_transport(["alpha", "beta", "gamma"], live=["alpha", "beta"])
        scheduler, tracker, _, _ = build(settings, transport)

        await scheduler.start()
        await settle(tracker, 1)
        settings.set("channels", "alpha")
        scheduler.fire()
        await settle(tracker, 2)
        await scheduler.stop()

        assert tracker.registry.online() == ["alpha"]
        assert tracker.registry.get_state("beta") is None

    @pytest.mark.asyncio
    async def test_removed_channels_kept_by_default(self, settings, fake_transport):
        transport = fake_transport(["alpha", "beta", "gamma"], live=["beta"])
        scheduler, tracker, _, _ = build(settings, transport)

        await scheduler.start()
        await settle(tracker, 1)
        settings.set("channels", "alpha")
        scheduler.fire()
        await settle(tracker, 2)
        await scheduler.stop()

        assert tracker.registry.get_state("beta") is ChannelState.OFFLINE
