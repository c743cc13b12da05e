"""
Module: message.py
Description: Message model and wire codec for IronMQ message payloads.

Defines the Message record exchanged with the messages endpoints and the
functions that encode batches for submission and decode reservation and
add responses. Fields holding their default value are left out of encoded
payloads so the server applies its own defaults.

Key Components:
- Message: message record with to_wire()/from_wire()
- encode_messages() / decode_messages(): batch payloads
- decode_ids() / assign_ids(): positional id correlation for adds

Dependencies: pydantic, typing
"""

from typing import Any, Dict, List, Sequence

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT = 60
DEFAULT_DELAY = 0
DEFAULT_EXPIRES = 604800


class Message(BaseModel):
    """
    A message sent to or retrieved from an IronMQ queue.

    A message with id 0 has never been accepted by the server. Messages
    returned by add operations are copies carrying the assigned id.

    Attributes:
        body: Message text
        timeout: Seconds a reservation hides the message after retrieval
        delay: Seconds before an added message becomes visible
        expires: Seconds until an unconsumed message is discarded
        id: Server-assigned identifier (0 when unsubmitted)
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore"
    )

    body: str = Field(
        ...,
        description="Message text"
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT,
        ge=0,
        description="Reservation timeout in seconds"
    )
    delay: int = Field(
        default=DEFAULT_DELAY,
        ge=0,
        description="Seconds before the message becomes visible"
    )
    expires: int = Field(
        default=DEFAULT_EXPIRES,
        ge=0,
        alias="expires_in",
        description="Seconds until the message is discarded"
    )
    id: int = Field(
        default=0,
        ge=0,
        description="Server-assigned identifier, 0 when unsubmitted"
    )

    @property
    def submitted(self) -> bool:
        """Whether the server has assigned this message an id."""
        return self.id != 0

    def to_wire(self) -> Dict[str, Any]:
        """
        Encode the message for a request body.

        The body is always present. timeout, delay, expires_in and id are
        emitted only when they differ from 60, 0, 604800 and 0.

        Returns:
            JSON-compatible dictionary
        """
        payload: Dict[str, Any] = {"body": self.body}
        if self.timeout != DEFAULT_TIMEOUT:
            payload["timeout"] = self.timeout
        if self.delay != DEFAULT_DELAY:
            payload["delay"] = self.delay
        if self.expires != DEFAULT_EXPIRES:
            payload["expires_in"] = self.expires
        if self.id != 0:
            payload["id"] = self.id
        return payload

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "Message":
        """
        Decode a message object from a response body.

        Unknown server fields are ignored and missing fields take their
        defaults. String identifiers are converted to integers.

        Args:
            data: Message object as returned by the service

        Returns:
            Decoded Message

        Raises:
            ValidationError: If the object does not describe a message
        """
        return cls.model_validate(data)


def encode_messages(messages: Sequence[Message]) -> Dict[str, Any]:
    """Wrap messages, in order, under the "messages" key."""
    return {"messages": [message.to_wire() for message in messages]}


def decode_messages(payload: Dict[str, Any]) -> List[Message]:
    """
    Decode the "messages" array of a reserve or peek response.

    Args:
        payload: Parsed response body

    Returns:
        Messages in server order, empty if the key is absent or null
    """
    return [Message.from_wire(item) for item in payload.get("messages") or []]


def decode_ids(payload: Dict[str, Any]) -> List[int]:
    """Extract the ordered identifier list of an add response."""
    return [int(value) for value in payload.get("ids") or []]


def assign_ids(messages: Sequence[Message], ids: Sequence[int]) -> List[Message]:
    """
    Correlate submitted messages with server-assigned identifiers.

    The Nth message receives the Nth identifier. When the server returns
    fewer identifiers than messages, only the prefix with a matching
    identifier is returned; surplus identifiers are ignored.

    Args:
        messages: Messages in submission order
        ids: Identifiers in response order

    Returns:
        Copies of the assigned messages with their id set
    """
    return [
        message.model_copy(update={"id": message_id})
        for message, message_id in zip(messages, ids)
    ]


def encode_delay(delay: int) -> Dict[str, Any]:
    """Encode a release delay, omitting it when it is the default of 0."""
    if delay != DEFAULT_DELAY:
        return {"delay": delay}
    return {}
