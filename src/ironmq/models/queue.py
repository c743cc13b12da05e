"""
Module: queue.py
Description: Queue administration records for the IronMQ client.

Defines the hosting cloud selector, push configuration sent when updating
a queue, and the read-only records decoded from queue info and push status
responses.

Key Components:
- Cloud: hosting region selector mapped to fixed host names
- PushType: pull, unicast or multicast delivery
- UpdateConfig: push settings with default-value omission
- PushInfo: per-subscriber delivery status of a message
- QueueInfo: queue metadata returned by GET queues/{name}

Dependencies: pydantic, enum, typing
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_RETRIES = 3
DEFAULT_RETRIES_DELAY = 60


class Cloud(str, Enum):
    """Cloud region hosting the project."""

    AWS = "aws"
    RACKSPACE = "rackspace"

    @property
    def host(self) -> str:
        """Host name label of the region's API endpoint."""
        return _CLOUD_HOSTS[self]


_CLOUD_HOSTS = {
    Cloud.AWS: "mq-aws-us-east-1",
    Cloud.RACKSPACE: "mq-rackspace-dfw",
}


class PushType(str, Enum):
    """How a queue delivers messages; pull queues have no subscribers."""

    PULL = "pull"
    UNICAST = "unicast"
    MULTICAST = "multicast"


def encode_subscribers(urls: Sequence[str]) -> Dict[str, Any]:
    """
    Encode subscriber URLs, each wrapped in its own object.

    Args:
        urls: Subscriber endpoint URLs

    Returns:
        {"subscribers": [{"url": ...}, ...]}, or {} when urls is empty
    """
    if not urls:
        return {}
    return {"subscribers": [{"url": url} for url in urls]}


class UpdateConfig(BaseModel):
    """
    Push settings applied by Queue.update().

    Attributes:
        push_type: Unicast or multicast delivery
        retries: Delivery attempts per subscriber
        retries_delay: Seconds between delivery attempts
        subscribers: Ordered subscriber URLs
    """

    model_config = ConfigDict(frozen=True)

    push_type: PushType = Field(default=PushType.MULTICAST)
    retries: int = Field(default=DEFAULT_RETRIES, ge=0)
    retries_delay: int = Field(default=DEFAULT_RETRIES_DELAY, ge=0)
    subscribers: List[str] = Field(default_factory=list)

    @field_validator('subscribers')
    @classmethod
    def validate_subscribers(cls, v: List[str]) -> List[str]:
        """Validate subscriber URLs are HTTP(S) URLs."""
        for url in v:
            if not url.startswith(('http://', 'https://')):
                raise ValueError(f"subscriber URL must be HTTP/HTTPS: {url}")
        return v

    def to_wire(self) -> Dict[str, Any]:
        """Encode the settings, leaving out defaults and an empty subscriber list."""
        payload: Dict[str, Any] = {}
        if self.push_type != PushType.MULTICAST:
            payload["push_type"] = self.push_type.value
        if self.retries != DEFAULT_RETRIES:
            payload["retries"] = self.retries
        if self.retries_delay != DEFAULT_RETRIES_DELAY:
            payload["retries_delay"] = self.retries_delay
        payload.update(encode_subscribers(self.subscribers))
        return payload


class PushInfo(BaseModel):
    """
    Delivery status of a pushed message for one subscriber.

    Attributes:
        id: Delivery attempt identifier
        url: Subscriber URL
        status_code: Last HTTP status returned by the subscriber
        retries_remaining: Delivery attempts left
        retries_delay: Seconds between attempts
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = 0
    url: str = ""
    status_code: int = 0
    retries_remaining: int = 0
    retries_delay: int = 0

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "PushInfo":
        return cls.model_validate(data)


def decode_push_statuses(payload: Dict[str, Any]) -> List[PushInfo]:
    """Decode the "subscribers" array of a push status response."""
    return [PushInfo.from_wire(item) for item in payload.get("subscribers") or []]


class QueueInfo(BaseModel):
    """
    Queue metadata as reported by the service.

    Attributes:
        id: Server identifier of the queue
        name: Queue name, unique per project
        project_id: Owning project
        size: Messages currently on the queue
        total_messages: Messages ever added
        push_type: Delivery mode (pull, unicast or multicast)
        retries: Push delivery attempts
        retries_delay: Seconds between push attempts
        subscribers: Subscriber URLs for push queues
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    name: str
    project_id: Optional[str] = None
    size: int = 0
    total_messages: Optional[int] = None
    push_type: Optional[PushType] = None
    retries: Optional[int] = None
    retries_delay: Optional[int] = None
    subscribers: List[str] = Field(default_factory=list)

    @field_validator('subscribers', mode='before')
    @classmethod
    def flatten_subscribers(cls, v: Any) -> List[str]:
        """Accept subscriber objects as returned by the service."""
        if v is None:
            return []
        return [item["url"] if isinstance(item, dict) else item for item in v]

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "QueueInfo":
        return cls.model_validate(data)
