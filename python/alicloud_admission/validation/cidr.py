"""
alicloud_admission/validation/cidr.py

CIDR algebra used by the network validators: lazy parsing, canonical form,
subset and overlap checks. Every check returns an ErrorList and treats an
absent (None) CIDR as "no constraint".
"""

from __future__ import annotations

import ipaddress
from typing import Optional, Sequence, Union

from alicloud_admission.models.field import (
    ErrorList,
    FieldPath,
    invalid,
    render_path,
)

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


class CIDRParseError(ValueError):
    """Raised when a string is not an `address/prefixLength` network."""


def parse_cidr(value: str) -> IPNetwork:
    """
    Parse `address/prefixLength` into a network, ignoring stray host bits.

    Bare addresses and netmask notation (10.0.0.0/255.0.0.0) are rejected.

    Raises:
        CIDRParseError: If the value is not parseable.
    """
    address, sep, prefix = value.partition("/")
    if not sep or not prefix.isdigit() or not address:
        raise CIDRParseError(f"invalid CIDR address: {value}")
    try:
        return ipaddress.ip_network(value, strict=False)
    except ValueError as exc:
        raise CIDRParseError(f"invalid CIDR address: {value}") from exc


def is_canonical(value: str) -> bool:
    """True iff the parsed network re-serializes to exactly `value`."""
    try:
        return str(parse_cidr(value)) == value
    except CIDRParseError:
        return False


def networks_intersect(cidr1: str, cidr2: str) -> bool:
    """True iff both values parse and share at least one address."""
    try:
        return _overlap(parse_cidr(cidr1), parse_cidr(cidr2))
    except CIDRParseError:
        return False


def _overlap(a: IPNetwork, b: IPNetwork) -> bool:
    return a.version == b.version and a.overlaps(b)


def _subnet_of(sub: IPNetwork, sup: IPNetwork) -> bool:
    return sub.version == sup.version and sub.subnet_of(sup)  # type: ignore[arg-type]


class CIDR:
    """
    An address range tied to the field path it was declared at.

    Parsing happens once at construction; a CIDR is then either parseable
    (`network` set) or carries its parse error, never both.
    """

    def __init__(self, value: str, fld_path: Optional[FieldPath] = None) -> None:
        self.value = value
        self.fld_path = fld_path
        self.network: Optional[IPNetwork] = None
        self.parse_error: Optional[CIDRParseError] = None
        try:
            self.network = parse_cidr(value)
        except CIDRParseError as exc:
            self.parse_error = exc

    def __repr__(self) -> str:
        return f"CIDR({self.value!r}, {render_path(self.fld_path)!r})"

    def parsed(self) -> bool:
        return self.network is not None

    def validate_parse(self) -> ErrorList:
        if self.parse_error is None:
            return []
        return [invalid(self.fld_path, self.value, str(self.parse_error))]

    def contains(self, other: CIDR) -> bool:
        """True iff `other` is fully inside this range. False if either is unparsed."""
        if self.network is None or other.network is None:
            return False
        return _subnet_of(other.network, self.network)

    def overlaps(self, other: CIDR) -> bool:
        """True iff the ranges share an address. False if either is unparsed."""
        if self.network is None or other.network is None:
            return False
        return _overlap(self.network, other.network)

    def validate_subset(self, *subsets: Optional[CIDR]) -> ErrorList:
        """
        Every given CIDR must lie within this one.

        Violations are reported at the subset's path, naming this CIDR's path
        and value. Unparseable CIDRs on either side are skipped; their parse
        errors are reported by validate_parse.
        """
        if self.network is None:
            return []
        return [
            invalid(
                subset.fld_path,
                subset.value,
                f'must be a subset of "{render_path(self.fld_path)}" ("{self.value}")',
            )
            for subset in subsets
            if subset is not None and subset.parsed() and not self.contains(subset)
        ]

    def validate_not_overlap(self, *others: Optional[CIDR]) -> ErrorList:
        """
        None of the given CIDRs may share an address with this one.

        Violations are reported at the other CIDR's path.
        """
        return [
            invalid(
                other.fld_path,
                other.value,
                f'must not overlap with "{render_path(self.fld_path)}" ("{self.value}")',
            )
            for other in others
            if other is not None and self.overlaps(other)
        ]


def validate_subset_of(cidr: Optional[CIDR], *supersets: Optional[CIDR]) -> ErrorList:
    """`cidr` must lie within each given superset; errors land on `cidr`'s path."""
    if cidr is None:
        return []
    return [err for sup in supersets if sup is not None for err in sup.validate_subset(cidr)]


def validate_cidr_parse(*cidrs: Optional[CIDR]) -> ErrorList:
    return [err for cidr in cidrs if cidr is not None for err in cidr.validate_parse()]


def validate_cidr_is_canonical(fld_path: Optional[FieldPath], value: str) -> ErrorList:
    """
    Flag a CIDR with host bits set below its prefix, e.g. 10.0.0.1/8.

    Empty and unparseable values produce no error here.
    """
    if not value:
        return []
    try:
        network = parse_cidr(value)
    except CIDRParseError:
        return []
    if str(network) != value:
        return [invalid(fld_path, value, "must be valid canonical CIDR")]
    return []


def validate_cidr_overlap(cidrs: Sequence[CIDR], allow_equal: bool) -> ErrorList:
    """
    Check all unordered pairs for overlap.

    When `allow_equal` is True, two identical ranges are not reported.
    The error lands on the later CIDR of each pair.
    """
    return [
        invalid(
            later.fld_path,
            later.value,
            f'must not overlap with "{render_path(earlier.fld_path)}" ("{earlier.value}")',
        )
        for i, earlier in enumerate(cidrs)
        for later in cidrs[i + 1 :]
        if earlier.overlaps(later)
        and not (allow_equal and earlier.network == later.network)
    ]


__all__ = [
    "CIDR",
    "CIDRParseError",
    "parse_cidr",
    "is_canonical",
    "networks_intersect",
    "validate_subset_of",
    "validate_cidr_parse",
    "validate_cidr_is_canonical",
    "validate_cidr_overlap",
]
