"""
Addressing Exceptions
=====================
Exception classes for CIDR and address parsing.
"""


class CidrParseError(ValueError):
    """Raised when a CIDR or bare IP entry cannot be parsed."""

    def __init__(self, entry: str, reason: str):
        super().__init__(f"Invalid CIDR entry {entry!r}: {reason}")
        self.entry = entry
        self.reason = reason
