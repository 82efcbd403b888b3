#!/usr/bin/env python3
"""
twitch-notify - notify when watched Twitch channels go online or offline

Usage:
    python main.py --config config/config.yaml
    python main.py --once

Console commands:
    /twitch_online            channels currently live
    /twitch_set channels a b  change a setting (next cycle)
    /twitch_reload            re-read the config file
    /quit                     stop
"""

import argparse
import asyncio
import logging
import pathlib
import sys

from commands.notify_commands import NotifyCommands
from core.command_router import CommandRouter
from core.message_bus import MessageBus
from core.poll_channel import PollChannel
from core.scheduler import PollScheduler
from core.settings import SettingsStore
from core.state_tracker import StateTracker
from core.stream_announcer import StreamAnnouncer
from core.surfaces import Surfaces
from twitchapi.auth import check_credentials
from twitchapi.monitors.poll_worker import PollWorker

# Logger will be configured in setup_logging()
LOGGER = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(description="twitch-notify - Twitch live notifications")
    parser.add_argument(
        '--config',
        type=str,
        default='config/config.yaml',
        help='Path to config file (default: config/config.yaml)'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default='logs/twitch_notify.log',
        help='Path to log file (default: logs/twitch_notify.log)'
    )
    parser.add_argument(
        '--once',
        action='store_true',
        help='Run a single poll cycle, print live channels and exit'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Verbose logging'
    )
    return parser.parse_args(argv)


def setup_logging(log_file, debug=False):
    """Log to file and console"""
    log_path = pathlib.Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s %(message)s",
        handlers=[
            logging.FileHandler(log_path),
            logging.StreamHandler()
        ],
        force=True  # Override any existing config
    )
    # Surfaces already echo to the console
    surface_handler = logging.FileHandler(log_path)
    surface_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s %(message)s"))
    surface_logger = logging.getLogger("surface")
    surface_logger.propagate = False
    surface_logger.handlers = [surface_handler]
    return log_path


async def read_commands(router: CommandRouter, surfaces: Surfaces):
    """Read console commands until EOF or /quit"""
    while True:
        line = await asyncio.to_thread(sys.stdin.readline)
        if not line:
            return
        line = line.strip()
        if not line:
            continue
        if line in ("/quit", "/exit"):
            return
        try:
            handled = await router.dispatch(line)
        except Exception as e:
            LOGGER.error(f"❌ Command failed: {line}: {e}", exc_info=True)
            surfaces.warn(f"Command failed: {e}")
            continue
        if not handled:
            surfaces.warn(f"Unknown command: {line}")


async def main(argv=None):
    """Load settings, start polling, serve console commands, shut down"""
    args = parse_args(argv)
    setup_logging(args.log_file, args.debug)

    try:
        settings = SettingsStore.from_file(args.config)
    except FileNotFoundError:
        return 1

    surfaces = Surfaces.console()
    bus = MessageBus()
    announcer = StreamAnnouncer(bus, surfaces, {"announcements": settings.section("announcements")})

    credentials = await check_credentials(settings.snapshot())
    for warning in credentials.warnings:
        surfaces.warn(warning)

    channel = PollChannel(maxsize=int(settings.get("monitoring.queue_size", 1000)))
    tracker = StateTracker(bus)
    worker = PollWorker(settings, channel, bus)
    commands = NotifyCommands(settings, tracker.registry, surfaces)

    if args.once:
        cycle = worker.start()
        reader = asyncio.create_task(tracker.consume(channel))
        if await cycle is None:
            reader.cancel()
            surfaces.warn("Poll cycle failed, see log")
            return 1
        await reader
        await bus.wait_all()
        await commands.online_command([])
        return 0

    router = CommandRouter()
    commands.register(router)

    scheduler = PollScheduler(settings, worker, tracker, channel)
    await scheduler.start()

    print("=" * 70)
    print("📡 twitch-notify running")
    print(f"   Polling every {scheduler.interval:g}s | commands: /twitch_online /twitch_set /twitch_reload /quit")
    print("=" * 70)

    try:
        await read_commands(router, surfaces)
    except asyncio.CancelledError:
        LOGGER.info("CTRL+C detected, shutting down...")
    finally:
        commands.unregister(router)
        await scheduler.stop()
        announcer.close()
        LOGGER.info("Stopped")
    return 0


def run():
    """Console script entry point"""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nBye!")


if __name__ == "__main__":
    run()
