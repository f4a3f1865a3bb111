"""Worker pool coordinator for http:BL lookups.

Pipeline: Feeder -> work channel -> N ResolverWorkers -> result channel
-> consumer. Results arrive in completion order, not input order.
"""

import logging
from ipaddress import IPv4Address
from typing import Callable, Sequence

import dns.resolver

from src.services.feeder import Feeder
from src.services.honeypot_codec import DEFAULT_ZONE
from src.services.resolver_worker import ResolverWorker, make_resolver
from src.utils.channel import Channel


logger = logging.getLogger(__name__)


DEFAULT_WORKERS = 10


class WorkerPool:
    """Owns the resolver workers, the feeder and both channels.

    The result channel is closed only after every worker and the feeder
    have exited, so no worker can send on a closed channel.

    Example:
        >>> pool = WorkerPool(token="abcdefghijkl", size=4)
        >>> pool.start(addresses)
        >>> for result in consume_results(pool.results, len(addresses)):
        ...     print(render_result(result))
        >>> pool.wait()
    """

    def __init__(
        self,
        token: str,
        size: int = DEFAULT_WORKERS,
        zone: str = DEFAULT_ZONE,
        timeout: float = 5,
        resolver_factory: Callable[[], dns.resolver.Resolver] | None = None,
    ):
        """Initialize pool.

        Args:
            token: http:BL access key.
            size: Number of resolver workers.
            zone: http:BL zone.
            timeout: Per-lookup timeout in seconds.
            resolver_factory: Builds one resolver per worker; defaults to a
                system resolver with ``timeout`` applied.

        Raises:
            ValueError: If size is not positive.
        """
        if size < 1:
            raise ValueError(f"Worker pool size must be positive, got {size}")

        self.size = size
        self._token = token
        self._zone = zone
        self._resolver_factory = resolver_factory or (lambda: make_resolver(timeout))

        # Bounded: the feeder stays at most one item per worker ahead
        self.work = Channel(maxsize=size)
        self.results = Channel()

        self._workers: list[ResolverWorker] = []
        self._feeder: Feeder | None = None

    def start(self, addresses: Sequence[IPv4Address]) -> int:
        """Start the workers and the feeder.

        Args:
            addresses: Addresses to look up, in input order.

        Returns:
            int: Number of results the consumer should expect.

        Raises:
            RuntimeError: If the pool was already started.
            dns.exception.DNSException: If a resolver cannot be built (for
                example no nameservers configured); nothing is started.
        """
        if self._feeder is not None:
            raise RuntimeError("worker pool already started")

        # Built before any thread starts so a broken resolver setup fails here
        resolvers = [self._resolver_factory() for _ in range(self.size)]

        for i, resolver in enumerate(resolvers):
            worker = ResolverWorker(
                name=f"resolver-{i}",
                work=self.work,
                results=self.results,
                token=self._token,
                resolver=resolver,
                zone=self._zone,
            )
            worker.start()
            self._workers.append(worker)

        self._feeder = Feeder(addresses, self.work)
        self._feeder.start()

        logger.info(
            f"Started {self.size} resolver workers for {len(addresses)} addresses"
        )
        return len(addresses)

    def wait(self) -> None:
        """Wait for the feeder and every worker, then close the result channel.

        Results not yet consumed stay readable after close.
        """
        if self._feeder is None:
            raise RuntimeError("worker pool was never started")

        self._feeder.join()
        for worker in self._workers:
            worker.join()

        self.results.close()
        logger.debug(
            f"All {len(self._workers)} workers finished",
            extra={"processed": [w.processed for w in self._workers]},
        )
