"""
Module: models
Description: Package initialization for the IronMQ wire records.

This package contains the pydantic models exchanged with the service:
- Message: message record and batch codec
- UpdateConfig, PushInfo, QueueInfo: queue administration records
- Cloud, PushType: closed enumerations
"""

from .message import Message
from .queue import Cloud, PushInfo, PushType, QueueInfo, UpdateConfig

__all__ = [
    "Cloud",
    "Message",
    "PushInfo",
    "PushType",
    "QueueInfo",
    "UpdateConfig",
]
