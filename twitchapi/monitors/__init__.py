"""
📡 Monitors - Polling-based stream status monitoring
"""
from .poll_worker import PollWorker

__all__ = ["PollWorker"]
