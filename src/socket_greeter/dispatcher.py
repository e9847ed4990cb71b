"""Single consumer loop over inbound Socket Mode events.

Reads one event at a time, acknowledges it where the protocol requires and
posts at most one greeting. Events are handled strictly in arrival order.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, FrozenSet, Optional

from slack_sdk.errors import SlackClientError

from .log import get_logger
from .slack.events import (
    CallbackEvent,
    ConnectionLifecycle,
    ConnectionState,
    InboundEvent,
    InteractiveAction,
    OutboundReply,
    SlashCommand,
    greeting_for,
)

Acknowledger = Callable[[str], None]
Replier = Callable[[OutboundReply], object]

GREETING_COMMANDS: FrozenSet[str] = frozenset({"/hello"})

# How long a blocked receive waits before re-checking for cancellation
POLL_INTERVAL = 0.2

_LIFECYCLE_MESSAGES = {
    ConnectionState.CONNECTING: "Connecting to Slack with Socket Mode...",
    ConnectionState.CONNECTED: "Connected to Slack with Socket Mode.",
    ConnectionState.CONNECTION_ERROR: "Connection failed. Retrying later...",
}


class Dispatcher:
    def __init__(
        self,
        ack: Acknowledger,
        reply: Replier,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.ack = ack
        self.reply = reply
        self.logger = logger or get_logger("dispatcher")

    def run(self, events: "queue.Queue[InboundEvent]", stop: threading.Event) -> None:
        """Consume events until `stop` is set. Events still queued at that point are dropped."""
        while not stop.is_set():
            try:
                event = events.get(timeout=POLL_INTERVAL)
            except queue.Empty:
                continue
            if stop.is_set():
                break
            try:
                self.handle(event)
            except Exception:
                self.logger.exception(f"Unhandled error while processing {event!r}")
        self.logger.info("Dispatch loop stopped")

    def handle(self, event: InboundEvent) -> None:
        self.logger.info(f"Event: {event!r}")

        if isinstance(event, ConnectionLifecycle):
            message = _LIFECYCLE_MESSAGES[event.state]
            if event.detail:
                message = f"{message} ({event.detail})"
            self.logger.info(message)
        elif isinstance(event, CallbackEvent):
            self.ack(event.envelope_id)
            self._handle_callback(event)
        elif isinstance(event, SlashCommand):
            self.ack(event.envelope_id)
            self._handle_command(event)
        elif isinstance(event, InteractiveAction):
            # Interactive components are acknowledged but not answered yet
            self.ack(event.envelope_id)
        else:
            self.logger.info(f"Ignored {event!r}")

    def _handle_callback(self, event: CallbackEvent) -> None:
        if event.callback_type != "event_callback":
            self.logger.info(f"Unsupported Events API event received: {event.callback_type}")
            return
        if not event.is_mention:
            self.logger.info(f"Ignored inner event: {event.inner_type}")
            return
        self._send(greeting_for(event.channel, event.user))

    def _handle_command(self, cmd: SlashCommand) -> None:
        if cmd.command not in GREETING_COMMANDS:
            self.logger.info(f"Unknown command: {cmd.command}")
            return
        self._send(greeting_for(cmd.channel_id, cmd.user_id))

    def _send(self, reply: OutboundReply) -> None:
        try:
            self.reply(reply)
        except (SlackClientError, OSError) as e:
            self.logger.error(f"Failed to post message: {e}")
            return
        self.logger.info(f"Replied in {reply.channel}")
