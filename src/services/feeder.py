"""Feeder: streams input addresses into the work channel."""

import logging
import threading
from ipaddress import IPv4Address
from typing import Sequence

from src.utils.channel import Channel


logger = logging.getLogger(__name__)


class Feeder(threading.Thread):
    """Single producer of work items.

    Sends ``(index, address)`` pairs in input order, then closes the work
    channel. Runs alongside the workers so a bounded work channel applies
    backpressure instead of buffering the whole list.
    """

    def __init__(self, addresses: Sequence[IPv4Address], work: Channel):
        super().__init__(name="feeder", daemon=True)
        self._addresses = addresses
        self._work = work
        self.fed = 0

    def run(self) -> None:
        for index, address in enumerate(self._addresses):
            self._work.put((index, address))
            self.fed += 1

        self._work.close()
        logger.debug(f"Feeder queued {self.fed} addresses")
