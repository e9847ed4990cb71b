#!/usr/bin/env python3
"""
Replay a captured Socket Mode envelope through the dispatcher without touching Slack.

The envelope file holds the JSON frame as Slack sends it, e.g.:

    {"type": "slash_commands", "envelope_id": "abc",
     "payload": {"command": "/hello", "channel_id": "C1", "user_id": "U1"}}

Acknowledgments and replies are logged instead of sent.
"""
import argparse
import json
import sys
from pathlib import Path

from slack_sdk.socket_mode.request import SocketModeRequest

from socket_greeter.dispatcher import Dispatcher
from socket_greeter.log import setup_logging, get_logger
from socket_greeter.slack.events import from_request

logger = get_logger("replay")

def dry_ack(envelope_id: str):
    logger.info(f"[dry-run] ack {envelope_id}")

def dry_reply(reply):
    logger.info(f"[dry-run] chat.postMessage channel={reply.channel} text={reply.text!r}")

def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("envelope", type=Path, help="Path to a Socket Mode envelope JSON file")
    parser.add_argument("--times", type=int, default=1, help="Replay the same envelope N times")
    args = parser.parse_args()

    setup_logging()
    req = SocketModeRequest.from_dict(json.loads(args.envelope.read_text()))
    if req is None:
        logger.error("File does not contain a Socket Mode envelope (need type, envelope_id and payload)")
        return 1

    dispatcher = Dispatcher(ack=dry_ack, reply=dry_reply)
    for _ in range(args.times):
        dispatcher.handle(from_request(req))
    return 0

if __name__ == "__main__":
    sys.exit(main())
