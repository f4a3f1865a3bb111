"""Unit tests for the resolver worker."""

from ipaddress import IPv4Address
from unittest.mock import MagicMock, patch

import dns.exception
import dns.resolver
import pytest

from src.models.classification import ClassFlags
from src.services.honeypot_codec import MalformedResponseError
from src.services.resolver_worker import (
    ResolverWorker,
    categorize_failure,
    lookup_address,
    make_resolver,
)
from src.utils.channel import Channel


ADDRESS = IPv4Address("8.8.8.8")
QNAME = "abc.8.8.8.8.dnsbl.httpbl.org"


class TestCategorizeFailure:
    """Test categorize_failure() mapping."""

    @pytest.mark.parametrize(
        "exception, expected",
        [
            (dns.resolver.NXDOMAIN(), "nxdomain"),
            (dns.exception.Timeout(), "timeout"),
            (dns.resolver.NoNameservers(), "no_nameservers"),
            (MalformedResponseError("bad"), "malformed_response"),
            (dns.exception.DNSException(), "dns_error"),
            (RuntimeError("boom"), "unknown_error"),
        ],
    )
    def test_categories(self, exception, expected):
        assert categorize_failure(exception) == expected


class TestLookupAddress:
    """Test lookup_address() encode -> resolve -> decode."""

    def test_listed(self, answer):
        resolver = MagicMock()
        resolver.resolve.return_value = answer("127.5.20.3")

        result = lookup_address(ADDRESS, 1, "abc", resolver)

        resolver.resolve.assert_called_once_with(
            QNAME, "A", raise_on_no_answer=False
        )
        assert result.is_listed() is True
        assert result.index == 1
        assert (result.age_days, result.score) == (5, 20)
        assert result.class_flags == ClassFlags.SUSPICIOUS | ClassFlags.HARVESTER

    def test_no_records_is_not_listed_without_error(self):
        resolver = MagicMock()
        resolver.resolve.return_value = []

        result = lookup_address(ADDRESS, 0, "abc", resolver)

        assert result.error is None
        assert result.listed is False

    def test_nxdomain_is_error(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = dns.resolver.NXDOMAIN()

        result = lookup_address(ADDRESS, 0, "abc", resolver)

        assert result.error == "nxdomain"
        assert result.listed is False

    def test_timeout_is_error(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = dns.exception.Timeout()

        result = lookup_address(ADDRESS, 0, "abc", resolver)

        assert result.error == "timeout"

    def test_malformed_response_is_error(self, answer):
        resolver = MagicMock()
        resolver.resolve.return_value = answer("2001:db8::1")

        result = lookup_address(ADDRESS, 0, "abc", resolver)

        assert result.error == "malformed_response"
        assert result.is_listed() is False


@patch("src.services.resolver_worker.dns.resolver.Resolver")
def test_make_resolver_applies_timeout(mock_resolver_class):
    mock_resolver = MagicMock()
    mock_resolver_class.return_value = mock_resolver

    resolver = make_resolver(timeout=3)

    assert resolver is mock_resolver
    assert mock_resolver.lifetime == 3
    assert mock_resolver.timeout == 3


class TestResolverWorker:
    """Test ResolverWorker thread loop."""

    def test_one_result_per_address(self, resolver_cls):
        resolver = resolver_cls({QNAME: ["127.1.2.4"]})
        work, results = Channel(), Channel()
        work.put((0, ADDRESS))
        work.put((1, IPv4Address("1.2.3.4")))
        work.close()

        worker = ResolverWorker(
            "resolver-0", work, results, "abc", resolver=resolver
        )
        worker.start()
        worker.join(timeout=5)

        assert not worker.is_alive()
        assert worker.processed == 2
        results.close()
        by_index = {r.index: r for r in results}
        assert by_index[0].is_listed() is True
        assert by_index[1].error == "nxdomain"

    def test_unexpected_error_still_produces_result(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = RuntimeError("boom")
        work, results = Channel(), Channel()
        work.put((0, ADDRESS))
        work.close()

        worker = ResolverWorker(
            "resolver-0", work, results, "abc", resolver=resolver
        )
        worker.run()

        result = results.receive(timeout=1)
        assert result.error == "unknown_error"
        assert result.address == ADDRESS
