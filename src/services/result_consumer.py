"""Result consumer: drains the result channel and renders CSV lines."""

import heapq
import logging
from dataclasses import dataclass
from typing import Iterator, TextIO

from src.models.classification import render_label
from src.models.lookup_result import LookupResult
from src.utils.channel import Channel, ChannelClosedError


logger = logging.getLogger(__name__)


@dataclass
class ConsumerStats:
    """Counts gathered while rendering results.

    Attributes:
        rendered: Lines written.
        listed: Results with a usable listing.
        not_listed: Empty answers and NXDOMAIN.
        errors: Failed lookups other than NXDOMAIN.
    """

    rendered: int = 0
    listed: int = 0
    not_listed: int = 0
    errors: int = 0


def render_result(result: LookupResult) -> str:
    """Render one result as a CSV line (without newline).

    Errored and unlisted addresses get three empty fields.

    Examples:
        >>> render_result(LookupResult.failed(IPv4Address("1.2.3.4"), 0, "nxdomain"))
        '1.2.3.4,,,'
    """
    if not result.is_listed():
        return f"{result.address},,,"

    return (
        f"{result.address},{result.age_days},{result.score},"
        f"{render_label(result.class_flags)}"
    )


def consume_results(
    results: Channel,
    expected: int,
    ordered: bool = False,
) -> Iterator[LookupResult]:
    """Receive exactly ``expected`` results from the channel.

    Args:
        results: Result channel fed by the workers.
        expected: Number of addresses submitted.
        ordered: Re-emit results in input order instead of arrival order.

    Yields:
        LookupResult: One per submitted address.

    Raises:
        ChannelClosedError: If the channel closes before all results arrive.
    """
    pending: list[tuple[int, LookupResult]] = []
    next_index = 0

    for received in range(expected):
        try:
            result = results.receive()
        except ChannelClosedError:
            raise ChannelClosedError(
                f"result channel closed after {received} of {expected} results"
            )

        if not ordered:
            yield result
            continue

        heapq.heappush(pending, (result.index, result))
        while pending and pending[0][0] == next_index:
            yield heapq.heappop(pending)[1]
            next_index += 1

    # Only reachable with gaps in the indices
    while pending:
        yield heapq.heappop(pending)[1]


def write_results(
    results: Channel,
    expected: int,
    stream: TextIO,
    ordered: bool = False,
) -> ConsumerStats:
    """Render every expected result to ``stream``, one line each.

    Args:
        results: Result channel fed by the workers.
        expected: Number of addresses submitted.
        stream: Output stream (stdout in production).
        ordered: Emit in input order instead of arrival order.

    Returns:
        ConsumerStats: Rendered, listed, not-listed and errored counts.
    """
    stats = ConsumerStats()

    for result in consume_results(results, expected, ordered):
        stream.write(render_result(result) + "\n")
        stats.rendered += 1
        if result.is_listed():
            stats.listed += 1
        elif result.is_not_listed():
            stats.not_listed += 1
        else:
            stats.errors += 1

    stream.flush()
    return stats
