"""Resolver worker: encode, resolve and decode http:BL lookups."""

import logging
import threading
import time
from ipaddress import IPv4Address

import dns.exception
import dns.resolver

from src.models.lookup_result import NXDOMAIN, LookupResult
from src.services.honeypot_codec import (
    DEFAULT_ZONE,
    MalformedResponseError,
    decode_response,
    encode_query,
)
from src.services.logger import log_lookup, log_lookup_failure
from src.utils.channel import Channel


logger = logging.getLogger(__name__)


def make_resolver(timeout: float = 5) -> dns.resolver.Resolver:
    """Build a stub resolver honoring a per-lookup timeout.

    Args:
        timeout: Total time allowed for one lookup, in seconds.

    Returns:
        dns.resolver.Resolver: Resolver using the system configuration.
    """
    resolver = dns.resolver.Resolver()
    resolver.timeout = timeout
    resolver.lifetime = timeout  # Total timeout for query
    return resolver


def categorize_failure(exception: Exception) -> str:
    """Map a lookup exception to a short failure reason.

    Args:
        exception: The exception raised while resolving or decoding.

    Returns:
        str: One of: nxdomain, timeout, no_nameservers, malformed_response,
             dns_error, unknown_error.
    """
    if isinstance(exception, dns.resolver.NXDOMAIN):
        # http:BL answers NXDOMAIN for addresses it does not list
        return NXDOMAIN
    elif isinstance(exception, dns.exception.Timeout):
        return "timeout"
    elif isinstance(exception, dns.resolver.NoNameservers):
        return "no_nameservers"
    elif isinstance(exception, MalformedResponseError):
        return "malformed_response"
    elif isinstance(exception, dns.exception.DNSException):
        return "dns_error"
    else:
        return "unknown_error"


def lookup_address(
    address: IPv4Address,
    index: int,
    token: str,
    resolver: dns.resolver.Resolver,
    zone: str = DEFAULT_ZONE,
) -> LookupResult:
    """Look up one address and build its LookupResult.

    Never raises for per-address failures: resolution and decode errors
    are recorded in the result.

    Args:
        address: IPv4 address to classify.
        index: Position of the address in the input sequence.
        token: http:BL access key.
        resolver: Resolver used for the A query.
        zone: http:BL zone.

    Returns:
        LookupResult: Populated verdict, or an error result.
    """
    query_hostname = encode_query(token, address, zone)

    try:
        # NoAnswer yields an empty answer: resolved, nothing listed
        answers = resolver.resolve(query_hostname, "A", raise_on_no_answer=False)
        records = [rdata.address for rdata in answers]
        verdict = decode_response(records)
    except (
        dns.resolver.NXDOMAIN,
        dns.resolver.NoNameservers,
        dns.exception.Timeout,
        dns.exception.DNSException,
        MalformedResponseError,
    ) as e:
        reason = categorize_failure(e)
        if reason != NXDOMAIN:
            log_lookup_failure(str(address), reason, str(e))
        return LookupResult.failed(address, index, reason)

    return LookupResult.from_verdict(address, index, verdict)


class ResolverWorker(threading.Thread):
    """One pool slot: drains the work channel into the result channel.

    Every address received produces exactly one LookupResult. The thread
    ends once the work channel is closed and drained.
    """

    def __init__(
        self,
        name: str,
        work: Channel,
        results: Channel,
        token: str,
        resolver: dns.resolver.Resolver,
        zone: str = DEFAULT_ZONE,
    ):
        super().__init__(name=name, daemon=True)
        self._work = work
        self._results = results
        self._token = token
        self._zone = zone
        self._resolver = resolver
        self.processed = 0

    def run(self) -> None:
        for index, address in self._work:
            start = time.time()
            try:
                result = lookup_address(
                    address, index, self._token, self._resolver, self._zone
                )
            except Exception as e:
                # Unexpected error - still owe the consumer a result
                logger.error(
                    f"Unexpected error looking up {address}: {e}", exc_info=True
                )
                result = LookupResult.failed(address, index, "unknown_error")

            log_lookup(result, duration_ms=int((time.time() - start) * 1000))
            self._results.put(result)
            self.processed += 1

        logger.debug(f"{self.name} finished after {self.processed} lookups")
