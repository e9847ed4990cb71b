"""Socket Mode gateway: the event source for the dispatcher.

Wraps slack_sdk's SocketModeClient. Envelopes and control frames are decoded
into InboundEvents and pushed onto a queue in arrival order; reconnects and
pings stay inside the SDK.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, List, Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackClientError
from slack_sdk.socket_mode import SocketModeClient
from slack_sdk.socket_mode.request import SocketModeRequest
from slack_sdk.socket_mode.response import SocketModeResponse

from ..log import get_logger
from .events import ConnectionLifecycle, ConnectionState, InboundEvent, from_control_message, from_request


class GatewayError(RuntimeError):
    """The gateway could not establish or keep its connection."""


class ReconnectAwareClient(SocketModeClient):
    """SocketModeClient that announces every connection attempt, including the SDK's own reconnects."""

    def __init__(self, *args, **kwargs) -> None:
        self.on_connecting_listeners: List[Callable[[], None]] = []
        super().__init__(*args, **kwargs)

    def connect(self) -> None:
        # connect_to_new_endpoint() reconnects through here as well
        for listener in self.on_connecting_listeners:
            listener()
        super().connect()


class SocketModeGateway:
    def __init__(
        self,
        client: ReconnectAwareClient,
        events: "queue.Queue[InboundEvent]",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.client = client
        self.events = events
        self.logger = logger or get_logger("gateway")

        self.client.socket_mode_request_listeners.append(self._on_request)
        self.client.on_message_listeners.append(self._on_message)
        self.client.on_error_listeners.append(self._on_error)
        self.client.on_connecting_listeners.append(self._on_connecting)

    @classmethod
    def create(
        cls,
        app_token: str,
        web_client: WebClient,
        events: "queue.Queue[InboundEvent]",
        trace: bool = False,
    ) -> "SocketModeGateway":
        client = ReconnectAwareClient(
            app_token=app_token,
            web_client=web_client,
            logger=get_logger("socketmode"),
            trace_enabled=trace,
            all_message_trace_enabled=trace,
            # One listener worker keeps enqueue order equal to arrival order
            concurrency=1,
        )
        return cls(client, events)

    def _publish(self, event: InboundEvent) -> None:
        self.events.put(event)

    def _on_request(self, client: SocketModeClient, req: SocketModeRequest) -> None:
        self._publish(from_request(req))

    def _on_message(self, message: str) -> None:
        event = from_control_message(message)
        if event is not None:
            self._publish(event)

    def _on_connecting(self) -> None:
        self._publish(ConnectionLifecycle(state=ConnectionState.CONNECTING))

    def _on_error(self, error: Exception) -> None:
        self._publish(ConnectionLifecycle(state=ConnectionState.CONNECTION_ERROR, detail=str(error)))

    def acknowledge(self, envelope_id: str) -> None:
        try:
            self.client.send_socket_mode_response(SocketModeResponse(envelope_id=envelope_id))
        except (SlackClientError, OSError) as e:
            self.logger.error(f"Failed to acknowledge envelope {envelope_id}: {e}")

    def run(self, stop: threading.Event) -> None:
        """
        Connect and hold the connection until `stop` is set, then close it.
        Raises GatewayError if the initial connection cannot be opened.
        """
        try:
            self.client.connect()
        except (SlackClientError, OSError) as e:
            self._publish(ConnectionLifecycle(state=ConnectionState.CONNECTION_ERROR, detail=str(e)))
            raise GatewayError(f"could not open Socket Mode connection: {e}") from e

        try:
            stop.wait()
        finally:
            self.logger.info("Closing Socket Mode connection")
            self.client.close()
