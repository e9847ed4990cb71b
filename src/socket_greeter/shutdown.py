"""Translate SIGINT/SIGTERM into cooperative cancellation."""

import signal
import threading
from .log import get_logger

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)

class ShutdownHandler:
    def __init__(self, stop: threading.Event, logger=None):
        self.stop = stop
        self.logger = logger or get_logger("shutdown")

    def install(self):
        # signal.signal only works from the main thread
        for signum in SHUTDOWN_SIGNALS:
            signal.signal(signum, self.handle_signal)

    def handle_signal(self, signum, frame):
        self.logger.info(f"Received {signal.Signals(signum).name}. Shutting down...")
        self.stop.set()
