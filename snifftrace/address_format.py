"""Textual forms of link and network layer addresses taken from packet headers."""

from __future__ import annotations

from collections.abc import Sequence

_MAC_LENGTH = 6
_IPV4_LENGTH = 4
_IPV6_LENGTH = 16


def _checked_octets(octets: Sequence[int], length: int, kind: str) -> list[int]:
    values = list(octets)
    if len(values) != length:
        raise ValueError(f"{kind} needs {length} octets, got {len(values)}")
    if any(not 0 <= value <= 255 for value in values):
        raise ValueError(f"{kind} octets must be in the range 0..=255")
    return values


def mac_from_dec_to_hex(mac_dec: Sequence[int]) -> str:
    """Format six octets as a colon separated, lower case hexadecimal MAC address."""
    octets = _checked_octets(mac_dec, _MAC_LENGTH, "a MAC address")
    return ":".join(f"{octet:02x}" for octet in octets)


def ipv4_from_octets(octets: Sequence[int]) -> str:
    """Format four octets as a dotted decimal IPv4 address."""
    values = _checked_octets(octets, _IPV4_LENGTH, "an IPv4 address")
    return ".".join(str(value) for value in values)


def _ipv6_group(high: int, low: int) -> str:
    if high == 0:
        return f"{low:x}"
    return f"{high:x}{low:02x}"


def _longest_zero_run(groups: list[str]) -> tuple[int, int]:
    """Start and length of the first longest run of ``"0"`` groups."""
    best_start, best_length = 0, 0
    run_start, run_length = 0, 0
    for position, group in enumerate(groups):
        if group == "0":
            if run_length == 0:
                run_start = position
            run_length += 1
            if run_length > best_length:
                best_start, best_length = run_start, run_length
        else:
            run_length = 0
    return best_start, best_length


def ipv6_from_long_dec_to_short_hex(ipv6_long: Sequence[int]) -> str:
    """Format sixteen octets as a compressed IPv6 address.

    The first longest run of at least two zero groups is replaced by ``::``.
    """
    octets = _checked_octets(ipv6_long, _IPV6_LENGTH, "an IPv6 address")
    groups = [_ipv6_group(high, low) for high, low in zip(octets[::2], octets[1::2])]

    start, length = _longest_zero_run(groups)
    if length < 2:
        return ":".join(groups)

    head = ":".join(groups[:start])
    tail = ":".join(groups[start + length:])
    return f"{head}::{tail}"