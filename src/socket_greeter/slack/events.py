"""Typed inbound events decoded from Socket Mode traffic.

Every message the gateway hands us becomes exactly one InboundEvent variant.
Anything that cannot be decoded into a known shape becomes Unrecognized, which
the dispatcher logs and never acknowledges.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from slack_sdk.socket_mode.request import SocketModeRequest


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CONNECTION_ERROR = "connection_error"


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


class ConnectionLifecycle(_Event):
    kind: Literal["connection"] = "connection"
    state: ConnectionState
    detail: Optional[str] = None


class CallbackEvent(_Event):
    kind: Literal["events_api"] = "events_api"
    envelope_id: str
    callback_type: str
    inner_type: Optional[str] = None
    channel: Optional[str] = None
    user: Optional[str] = None

    @property
    def is_mention(self) -> bool:
        return (
            self.callback_type == "event_callback"
            and self.inner_type == "app_mention"
            and bool(self.channel)
            and bool(self.user)
        )


class SlashCommand(_Event):
    kind: Literal["slash_commands"] = "slash_commands"
    envelope_id: str
    command: str
    channel_id: str
    user_id: str
    text: str = ""


class InteractiveAction(_Event):
    kind: Literal["interactive"] = "interactive"
    envelope_id: str
    action_type: Optional[str] = None


class Unrecognized(_Event):
    kind: Literal["unrecognized"] = "unrecognized"
    type: str
    detail: Optional[str] = None


InboundEvent = Union[ConnectionLifecycle, CallbackEvent, SlashCommand, InteractiveAction, Unrecognized]


class OutboundReply(BaseModel):
    channel: str
    text: str


def greeting_for(channel: str, user: str) -> OutboundReply:
    return OutboundReply(channel=channel, text=f"Hello <@{user}>!")


def from_request(req: SocketModeRequest) -> InboundEvent:
    """
    Decode a Socket Mode envelope into an InboundEvent.
    Payloads that do not have the expected shape are returned as Unrecognized.
    """
    payload = req.payload
    try:
        if req.type == "events_api":
            inner: Dict[str, Any] = payload.get("event") or {}
            return CallbackEvent(
                envelope_id=req.envelope_id,
                callback_type=payload["type"],
                inner_type=inner.get("type"),
                channel=inner.get("channel"),
                user=inner.get("user"),
            )
        if req.type == "slash_commands":
            return SlashCommand(
                envelope_id=req.envelope_id,
                command=payload["command"],
                channel_id=payload["channel_id"],
                user_id=payload["user_id"],
                text=payload.get("text") or "",
            )
        if req.type == "interactive":
            return InteractiveAction(envelope_id=req.envelope_id, action_type=payload.get("type"))
    except (KeyError, TypeError, ValidationError) as e:
        return Unrecognized(type=req.type, detail=f"malformed payload in envelope {req.envelope_id}: {e}")

    return Unrecognized(type=req.type, detail=f"envelope {req.envelope_id}")


def from_control_message(message: str) -> Optional[InboundEvent]:
    """
    Map raw gateway control frames to events.
    Envelopes carrying an envelope_id arrive separately as SocketModeRequests, so they map to None here.
    """
    try:
        data = json.loads(message)
    except ValueError:
        return Unrecognized(type="invalid_json", detail=message[:200])
    if not isinstance(data, dict):
        return Unrecognized(type="invalid_json", detail=message[:200])

    msg_type = data.get("type")
    if msg_type == "hello":
        return ConnectionLifecycle(state=ConnectionState.CONNECTED)
    if msg_type == "disconnect":
        return Unrecognized(type="disconnect", detail=data.get("reason"))
    return None
