"""
Module: queue.py
Description: Queue handle exposing every per-queue operation.

A Queue is a name-bound reference, not a snapshot: the server-side queue
can be deleted or recreated at any time, so each call resolves the name
again and nothing but the name is kept between calls.

Unsuccessful statuses come back as False, 0, an empty list or None.
Transport failures propagate as httpx errors.

Dependencies: httpx, typing, models, utils
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

import httpx

from ironmq.models.message import (
    DEFAULT_TIMEOUT,
    Message,
    assign_ids,
    decode_ids,
    decode_messages,
    encode_delay,
    encode_messages,
)
from ironmq.models.queue import (
    PushInfo,
    QueueInfo,
    UpdateConfig,
    decode_push_statuses,
    encode_subscribers,
)
from ironmq.utils.http import queue_path
from ironmq.utils.logger import get_logger

if TYPE_CHECKING:
    from ironmq.client import Client

logger = get_logger(__name__)

MAX_MESSAGES_PER_REQUEST = 100


def _check_count(n: int) -> None:
    if not 1 <= n <= MAX_MESSAGES_PER_REQUEST:
        raise ValueError(f"n must be between 1 and {MAX_MESSAGES_PER_REQUEST}")


def _check_submitted(message: Message) -> None:
    if not isinstance(message, Message):
        raise ValueError("message must be a Message instance")
    if not message.submitted:
        raise ValueError("message has no server-assigned id")


class Queue:
    """Handle for one named queue in a project."""

    def __init__(self, client: "Client", name: str):
        if not name or not isinstance(name, str):
            raise ValueError("name must be a non-empty string")
        self._client = client
        self.name = name

    def __repr__(self) -> str:
        return f"Queue(name={self.name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Queue):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def path(self, *parts: Any) -> str:
        """Path of this queue, or of a sub-resource of it."""
        return queue_path(self.name, *parts)

    def _log_failure(self, operation: str, response: httpx.Response, **context: Any) -> None:
        logger.warning(
            "Queue operation not successful",
            queue=self.name,
            operation=operation,
            status_code=response.status_code,
            **context
        )

    async def _send_for_flag(
        self,
        operation: str,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        **context: Any
    ) -> bool:
        response = await self._client.send(method, path, payload=payload)
        if not response.is_success:
            self._log_failure(operation, response, **context)
        return response.is_success

    # Queue administration

    async def get_info(self) -> Optional[QueueInfo]:
        """
        Fetch queue metadata.

        Returns:
            QueueInfo, or None if the queue could not be fetched
        """
        response = await self._client.send("GET", self.path())
        if not response.is_success:
            self._log_failure("get_info", response)
            return None
        data = response.json()
        data.setdefault("name", self.name)
        return QueueInfo.from_wire(data)

    async def get_count(self) -> int:
        """
        Get the number of messages on the queue.

        Returns:
            Message count, or 0 if the queue could not be fetched
        """
        response = await self._client.send("GET", self.path())
        if not response.is_success:
            self._log_failure("get_count", response)
            return 0
        return int(response.json().get("size") or 0)

    async def get_exists(self) -> bool:
        """Check whether the queue exists."""
        response = await self._client.send("GET", self.path())
        return response.is_success

    async def delete(self) -> bool:
        """
        Delete the queue and all its messages.

        Deleting a queue that no longer exists returns False.
        """
        deleted = await self._send_for_flag("delete", "DELETE", self.path())
        if deleted:
            logger.info("Queue deleted", queue=self.name)
        return deleted

    async def update(self, config: UpdateConfig) -> bool:
        """
        Update the queue's push settings.

        Args:
            config: Push settings; defaults are not sent

        Returns:
            True if the update was accepted
        """
        if not isinstance(config, UpdateConfig):
            raise ValueError("config must be an UpdateConfig instance")
        return await self._send_for_flag("update", "POST", self.path(), config.to_wire())

    async def add_subscribers(self, urls: Sequence[str]) -> bool:
        """Add push subscribers to the queue."""
        return await self._send_for_flag(
            "add_subscribers",
            "POST",
            self.path("subscribers"),
            encode_subscribers(urls),
            count=len(urls)
        )

    async def remove_subscribers(self, urls: Sequence[str]) -> bool:
        """Remove push subscribers from the queue."""
        return await self._send_for_flag(
            "remove_subscribers",
            "DELETE",
            self.path("subscribers"),
            encode_subscribers(urls),
            count=len(urls)
        )

    async def clear_messages(self) -> bool:
        """Remove every message from the queue."""
        return await self._send_for_flag("clear_messages", "POST", self.path("clear"), {})

    # Messages

    async def add_messages(self, messages: Sequence[Message]) -> List[Message]:
        """
        Add messages to the queue.

        The server returns one identifier per accepted message, in
        submission order; the Nth message gets the Nth identifier. If fewer
        identifiers come back, only the messages that received one are
        returned.

        Args:
            messages: Messages in submission order

        Returns:
            Copies of the messages with their ids, or an empty list if the
            request was not successful
        """
        messages = list(messages)
        if not messages:
            return []
        for message in messages:
            if not isinstance(message, Message):
                raise ValueError("messages must be Message instances")

        response = await self._client.send(
            "POST", self.path("messages"), payload=encode_messages(messages)
        )
        if not response.is_success:
            self._log_failure("add_messages", response, count=len(messages))
            return []

        added = assign_ids(messages, decode_ids(response.json()))
        if len(added) < len(messages):
            logger.warning(
                "Fewer ids returned than messages submitted",
                queue=self.name,
                submitted=len(messages),
                assigned=len(added)
            )
        logger.debug("Messages added", queue=self.name, count=len(added))
        return added

    async def add_message(self, message: Union[Message, str]) -> Optional[Message]:
        """
        Add a single message to the queue.

        Args:
            message: Message, or a body to send with default settings

        Returns:
            The message with its id, or None if it was not added
        """
        if isinstance(message, str):
            message = Message(body=message)
        added = await self.add_messages([message])
        return added[0] if added else None

    async def get_messages(self, n: int = 1, timeout: int = DEFAULT_TIMEOUT) -> List[Message]:
        """
        Reserve up to n messages.

        Reserved messages are hidden from other consumers for timeout
        seconds. A message not deleted within that window goes back on
        the queue.

        Args:
            n: Maximum number of messages (1 to 100)
            timeout: Reservation timeout in seconds

        Returns:
            Reserved messages, empty if none are available or on failure
        """
        _check_count(n)
        if timeout < 0:
            raise ValueError("timeout must not be negative")

        response = await self._client.send(
            "GET", self.path("messages"), params={"n": n, "timeout": timeout}
        )
        if not response.is_success:
            self._log_failure("get_messages", response, n=n)
            return []
        return decode_messages(response.json())

    async def get_message(self, timeout: int = DEFAULT_TIMEOUT) -> Optional[Message]:
        """Reserve at most one message, or return None."""
        messages = await self.get_messages(1, timeout)
        return messages[0] if messages else None

    async def peek_messages(self, n: int = 1) -> List[Message]:
        """
        Look at up to n messages without reserving them.

        Returns:
            Messages at the head of the queue, empty on failure
        """
        _check_count(n)
        response = await self._client.send(
            "GET", self.path("messages", "peek"), params={"n": n}
        )
        if not response.is_success:
            self._log_failure("peek_messages", response, n=n)
            return []
        return decode_messages(response.json())

    async def release_message(self, message: Message, delay: int = 0) -> bool:
        """
        Put a reserved message back on the queue.

        Args:
            message: Reserved message
            delay: Seconds before the message becomes visible again

        Returns:
            True if the message was released
        """
        _check_submitted(message)
        if delay < 0:
            raise ValueError("delay must not be negative")
        return await self._send_for_flag(
            "release_message",
            "POST",
            self.path("messages", message.id, "release"),
            encode_delay(delay),
            message_id=message.id
        )

    async def touch_message(self, message: Message) -> bool:
        """
        Extend a reservation.

        The reservation is extended by the timeout the message was
        reserved with.
        """
        _check_submitted(message)
        return await self._send_for_flag(
            "touch_message",
            "POST",
            self.path("messages", message.id, "touch"),
            {},
            message_id=message.id
        )

    async def delete_message(self, message: Message) -> bool:
        """
        Delete a message from the queue.

        Call this once a reserved message has been processed, otherwise it
        goes back on the queue when its reservation times out.
        """
        _check_submitted(message)
        return await self._send_for_flag(
            "delete_message",
            "DELETE",
            self.path("messages", message.id),
            message_id=message.id
        )

    async def get_push_status(self, message: Message) -> List[PushInfo]:
        """
        Get delivery status of a pushed message for each subscriber.

        Returns:
            One PushInfo per subscriber, empty on failure
        """
        _check_submitted(message)
        response = await self._client.send(
            "GET", self.path("messages", message.id, "subscribers")
        )
        if not response.is_success:
            self._log_failure("get_push_status", response, message_id=message.id)
            return []
        return decode_push_statuses(response.json())
