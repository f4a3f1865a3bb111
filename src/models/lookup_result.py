"""Per-address reputation lookup result model."""

from dataclasses import dataclass
from ipaddress import IPv4Address

from src.models.classification import ClassFlags


@dataclass(frozen=True)
class Verdict:
    """Decoded http:BL answer.

    Attributes:
        listed: Whether the address is listed at all.
        age_days: Days since the address was last seen (0-255).
        score: Threat score (0-255).
        class_flags: Visitor classification bit-set.
    """

    listed: bool
    age_days: int = 0
    score: int = 0
    class_flags: ClassFlags = ClassFlags.NONE


NOT_LISTED = Verdict(listed=False)

# Failure reason for http:BL's ordinary "not listed" answer
NXDOMAIN = "nxdomain"


@dataclass(frozen=True)
class LookupResult:
    """Result of one reputation lookup.

    Created exactly once per submitted address by a single resolver worker
    and never mutated afterwards. When ``error`` is set the verdict fields
    are meaningless.

    Attributes:
        address: IPv4 address that was looked up.
        index: Position of the address in the input sequence.
        error: Failure reason, or None on success.
        listed: Whether http:BL lists the address.
        score: Threat score (0-255).
        age_days: Days since last activity (0-255).
        class_flags: Visitor classification bit-set.
    """

    address: IPv4Address
    index: int
    error: str | None = None
    listed: bool = False
    score: int = 0
    age_days: int = 0
    class_flags: ClassFlags = ClassFlags.NONE

    @classmethod
    def from_verdict(
        cls, address: IPv4Address, index: int, verdict: Verdict
    ) -> "LookupResult":
        return cls(
            address=address,
            index=index,
            listed=verdict.listed,
            score=verdict.score,
            age_days=verdict.age_days,
            class_flags=verdict.class_flags,
        )

    @classmethod
    def failed(cls, address: IPv4Address, index: int, reason: str) -> "LookupResult":
        return cls(address=address, index=index, error=reason)

    def is_error(self) -> bool:
        """Check if the lookup failed.

        Returns:
            bool: True if an error reason is recorded.
        """
        return self.error is not None

    def is_not_listed(self) -> bool:
        """Check if http:BL answered that the address is not listed.

        Covers both an empty answer and NXDOMAIN.

        Returns:
            bool: True for a definitive not-listed answer.
        """
        if self.error is None:
            return not self.listed
        return self.error == NXDOMAIN

    def is_listed(self) -> bool:
        """Check if the address is listed and the verdict is usable.

        Returns:
            bool: True only for successful lookups that returned a listing.
        """
        return self.error is None and self.listed
