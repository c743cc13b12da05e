"""
Module: http.py
Description: Request helpers shared by the client and queue handles.

Builds the project base endpoint, the OAuth header and JSON request
bodies. Bodies are passed to httpx as raw bytes so the content type stays
exactly application/json; the service rejects a charset parameter.
"""

import json
from typing import Any, Dict
from urllib.parse import quote

from ironmq.models.queue import Cloud

JSON_CONTENT_TYPE = "application/json"


def build_base_url(
    project_id: str,
    cloud: Cloud = Cloud.AWS,
    api_version: str = "1",
    service_domain: str = "iron.io"
) -> str:
    """
    Build the project base endpoint.

    Example:
        >>> build_base_url("abc123")
        'https://mq-aws-us-east-1.iron.io/1/projects/abc123/'
    """
    return f"https://{cloud.host}.{service_domain}/{api_version}/projects/{quote(project_id, safe='')}/"


def auth_headers(token: str) -> Dict[str, str]:
    """Headers carrying the OAuth token sent on every request."""
    return {"Authorization": f"OAuth {token}"}


def json_body(payload: Dict[str, Any]) -> bytes:
    """Serialize a request payload to compact JSON bytes."""
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


def queue_path(name: str, *parts: Any) -> str:
    """
    Build a path relative to the base endpoint for a queue resource.

    Example:
        >>> queue_path("orders", "messages", 42, "touch")
        'queues/orders/messages/42/touch'
    """
    segments = ["queues", quote(name, safe="")]
    segments.extend(str(part) for part in parts)
    return "/".join(segments)
