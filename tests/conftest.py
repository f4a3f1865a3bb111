"""pytest fixtures for testing."""

import time
from ipaddress import IPv4Address
from unittest.mock import MagicMock

import dns.resolver
import pytest


def make_answer(*addresses: str) -> list[MagicMock]:
    """Build a fake resolver answer holding A records."""
    return [MagicMock(address=address) for address in addresses]


class FakeResolver:
    """Resolver stand-in keyed by query name.

    Values are either a list of answer addresses or an exception instance
    to raise. Unknown names raise NXDOMAIN.
    """

    def __init__(self, responses: dict | None = None, delays: dict | None = None):
        self.responses = responses or {}
        self.delays = delays or {}
        self.queries: list[str] = []

    def resolve(self, qname, rdtype="A", raise_on_no_answer=True):
        self.queries.append(qname)
        if qname in self.delays:
            time.sleep(self.delays[qname])

        response = self.responses.get(qname, dns.resolver.NXDOMAIN())
        if isinstance(response, Exception):
            raise response
        return make_answer(*response)


@pytest.fixture
def resolver_cls():
    """The FakeResolver class, for tests that script responses."""
    return FakeResolver


@pytest.fixture
def answer():
    """Builder for fake A record answers."""
    return make_answer


@pytest.fixture
def sample_addresses():
    """A handful of exit addresses in input order."""
    return [
        IPv4Address("1.2.3.4"),
        IPv4Address("8.8.8.8"),
        IPv4Address("203.0.113.45"),
        IPv4Address("198.51.100.7"),
        IPv4Address("192.0.2.1"),
    ]
