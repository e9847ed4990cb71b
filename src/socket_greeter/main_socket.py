"""
Socket Mode entry point for Socket Greeter.
Connects to Slack via WebSocket - no public URL needed.

Usage:
    python -m socket_greeter.main_socket
"""
import queue
import sys
import threading
from pydantic import ValidationError
from .config import get_settings
from .log import setup_logging, get_logger
from .dispatcher import Dispatcher
from .shutdown import ShutdownHandler
from .slack.client import SlackClientWrapper
from .slack.gateway import GatewayError, SocketModeGateway

logger = get_logger("main")

def main() -> int:
    """Run the bot until SIGINT/SIGTERM. Returns the process exit code."""
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        invalid = ", ".join(str(err["loc"][0]) for err in e.errors())
        logger.critical(f"Invalid configuration ({invalid}). SLACK_APP_TOKEN and SLACK_BOT_TOKEN must be set.")
        return 1

    setup_logging(settings.LOG_LEVEL, debug_sdk=settings.SLACK_DEBUG)

    slack = SlackClientWrapper.from_token(settings.SLACK_BOT_TOKEN)
    events = queue.Queue()
    gateway = SocketModeGateway.create(
        settings.SLACK_APP_TOKEN,
        slack.client,
        events,
        trace=settings.SLACK_DEBUG,
    )

    stop = threading.Event()
    dispatcher = Dispatcher(ack=gateway.acknowledge, reply=slack.post_message)
    worker = threading.Thread(target=dispatcher.run, args=(events, stop), name="dispatcher", daemon=True)
    worker.start()

    ShutdownHandler(stop).install()

    logger.info("Starting Socket Mode listener...")
    try:
        gateway.run(stop)
    except GatewayError as e:
        logger.critical(f"Error running socketmode: {e}")
        stop.set()
        return 1

    worker.join(timeout=5)
    logger.info("Stopped.")
    return 0

def cli():
    sys.exit(main())

if __name__ == "__main__":
    cli()
