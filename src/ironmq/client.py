"""
Module: client.py
Description: IronMQ project client.

Owns the HTTP transport configuration for one project: the region
endpoint, the OAuth token and the connection retry policy. Creates queue
handles and enumerates the project's queues page by page.

Key Components:
- Client: transport owner, queue factory and queue listing
- Client.send(): single request with connection retry and logging

Dependencies: httpx, asyncio, uuid, models, utils, retry
"""

import asyncio
import uuid
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from ironmq.config.settings import Settings, get_settings
from ironmq.models.queue import Cloud, QueueInfo
from ironmq.queue import Queue
from ironmq.retry import connect_retrying
from ironmq.utils.http import (
    JSON_CONTENT_TYPE,
    auth_headers,
    build_base_url,
    json_body,
)
from ironmq.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 30
MAX_PAGE_SIZE = 100


class Client:
    """
    Client for one IronMQ project.

    The client may own its httpx.AsyncClient or borrow one supplied by the
    caller; only an owned client is closed by aclose().
    """

    def __init__(
        self,
        project_id: str,
        token: str,
        cloud: Cloud = Cloud.AWS,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        connect_attempts: int = 3,
        retry_backoff: float = 0.5,
        api_version: str = "1",
        service_domain: str = "iron.io"
    ):
        """
        Initialize the client.

        Args:
            project_id: IronMQ project identifier
            token: OAuth token
            cloud: Cloud region hosting the project
            http_client: Optional transport to use instead of an owned one
            timeout: HTTP timeout in seconds for an owned transport
            connect_attempts: Attempts made when a connection cannot be established
            retry_backoff: Multiplier for the wait between connection attempts
            api_version: REST API version
            service_domain: Service domain appended to the region host

        Raises:
            ValueError: If project_id, token, cloud or connect_attempts is invalid
        """
        cloud = Cloud(cloud)
        if not project_id or not isinstance(project_id, str):
            raise ValueError("project_id must be a non-empty string")
        if not token or not isinstance(token, str):
            raise ValueError("token must be a non-empty string")
        if connect_attempts < 1:
            raise ValueError("connect_attempts must be at least 1")

        self.project_id = project_id
        self.cloud = cloud
        self.base_url = build_base_url(project_id, cloud, api_version, service_domain)
        self.connect_attempts = connect_attempts
        self.retry_backoff = retry_backoff
        self._headers = auth_headers(token)
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout)
        )

        logger.debug(
            "IronMQ client initialized",
            project_id=project_id,
            cloud=cloud.value,
            base_url=self.base_url
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ) -> "Client":
        """
        Build a client from environment-backed settings.

        Also applies the configured log level, unless the application has
        its own structlog setup.

        Raises:
            ValueError: If the settings carry no project id or token
        """
        settings = settings or get_settings()
        configure_logging(settings.log_level)
        return cls(
            settings.project_id,
            settings.token,
            settings.cloud,
            http_client=http_client,
            timeout=settings.request_timeout,
            connect_attempts=settings.connect_attempts,
            retry_backoff=settings.retry_backoff,
            api_version=settings.api_version,
            service_domain=settings.service_domain
        )

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """
        Send one request relative to the project endpoint.

        Args:
            method: HTTP method
            path: Path relative to the base endpoint
            params: Optional query parameters
            payload: Optional JSON body

        Returns:
            The response, whatever its status

        Raises:
            httpx.TransportError: If the service could not be reached
        """
        headers = dict(self._headers)
        content = None
        if payload is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
            content = json_body(payload)

        url = self.base_url + path
        logger.debug("Sending request", method=method, path=path, params=params)

        try:
            async for attempt in connect_retrying(self.connect_attempts, self.retry_backoff):
                with attempt:
                    response = await self._http.request(
                        method,
                        url,
                        params=params,
                        content=content,
                        headers=headers
                    )
        except httpx.TransportError as e:
            logger.error(
                "Request failed",
                method=method,
                path=path,
                error=str(e),
                error_type=type(e).__name__
            )
            raise

        logger.debug(
            "Response received",
            method=method,
            path=path,
            status_code=response.status_code
        )
        return response

    def get_queue(self, name: str) -> Queue:
        """Return a handle for a queue without contacting the service."""
        return Queue(self, name)

    async def create_or_get_queue(self, name: Optional[str] = None) -> Queue:
        """
        Get an existing queue or create it if it does not exist yet.

        If no name is given, a random unique name is generated. The request
        is a no-op when the queue already exists.

        Args:
            name: Optional queue name

        Returns:
            Queue handle bound to the name

        Raises:
            httpx.TransportError: If the service could not be reached
        """
        if not name or not name.strip():
            name = str(uuid.uuid4())

        queue = Queue(self, name)
        response = await self.send("POST", queue.path(), payload={})
        if response.is_success:
            logger.info("Queue ready", queue=name)
        else:
            logger.warning(
                "Queue create request not accepted",
                queue=name,
                status_code=response.status_code
            )
        return queue

    async def list_queues(
        self,
        start_page: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        cancel: Optional[asyncio.Event] = None
    ) -> AsyncIterator[Queue]:
        """
        Iterate over all queues in the project, one page at a time.

        A page shorter than page_size ends the iteration. Setting cancel
        stops the iteration before the next page is fetched; queues already
        yielded stay yielded and no error is raised. Each call keeps its own
        page cursor.

        Args:
            start_page: First page to fetch
            page_size: Queues per page (1 to 100)
            cancel: Optional event checked before each page fetch

        Yields:
            Queue handles in listing order

        Raises:
            ValueError: If start_page or page_size is out of range
            httpx.HTTPStatusError: If a page request is not successful
            httpx.TransportError: If the service could not be reached
        """
        if start_page < 0:
            raise ValueError("start_page must not be negative")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")

        page = start_page
        while True:
            if cancel is not None and cancel.is_set():
                logger.info("Queue listing cancelled", page=page)
                return

            params: Dict[str, Any] = {"page": page}
            if page_size != DEFAULT_PAGE_SIZE:
                params["per_page"] = page_size

            response = await self.send("GET", "queues", params=params)
            response.raise_for_status()
            items = response.json()

            logger.debug("Queue page fetched", page=page, count=len(items))

            for item in items:
                yield Queue(self, QueueInfo.from_wire(item).name)

            if len(items) != page_size:
                return
            page += 1
