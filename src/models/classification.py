"""Project Honeypot visitor classification flags."""

from enum import IntFlag


class ClassFlags(IntFlag):
    """Classification bit-set carried in the last octet of an http:BL answer.

    Bits are independent; any combination (including none) is valid.
    """

    NONE = 0
    SUSPICIOUS = 1
    HARVESTER = 2
    COMMENT_SPAMMER = 4


# Fixed rendering order, one CSV slot per flag
CLASS_LABELS: tuple[tuple[ClassFlags, str], ...] = (
    (ClassFlags.SUSPICIOUS, "suspicious"),
    (ClassFlags.HARVESTER, "harvester"),
    (ClassFlags.COMMENT_SPAMMER, "comment spammer"),
)


def render_label(flags: ClassFlags | int) -> str:
    """Render a flag set as three comma-joined slots.

    Unset flags leave their slot empty, so the result always contains
    exactly two commas.

    Examples:
        >>> render_label(ClassFlags.SUSPICIOUS | ClassFlags.HARVESTER)
        'suspicious,harvester,'
        >>> render_label(0)
        ',,'
    """
    flags = ClassFlags(int(flags) & 0b111)
    return ",".join(label if flags & flag else "" for flag, label in CLASS_LABELS)


def parse_label(text: str) -> ClassFlags:
    """Parse a three-slot label back into a flag set.

    Raises:
        ValueError: If the text does not have three slots or a slot holds
            the wrong label.
    """
    slots = text.split(",")
    if len(slots) != len(CLASS_LABELS):
        raise ValueError(f"Classification label must have 3 slots: {text!r}")

    flags = ClassFlags.NONE
    for slot, (flag, label) in zip(slots, CLASS_LABELS):
        if slot == label:
            flags |= flag
        elif slot:
            raise ValueError(f"Unexpected classification label {slot!r}")
    return flags
