"""
Package: ironmq
Description: Async client library for the IronMQ hosted message queue.

Exports the project client, queue handle and the records exchanged with
the service.
"""

from .client import Client
from .models import Cloud, Message, PushInfo, PushType, QueueInfo, UpdateConfig
from .queue import Queue

__version__ = "0.1.0"

__all__ = [
    "Client",
    "Cloud",
    "Message",
    "PushInfo",
    "PushType",
    "Queue",
    "QueueInfo",
    "UpdateConfig",
]
