"""Connections keyed by address:port pairs and the shared traffic state."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from snifftrace.app_protocol import AppProtocol
from snifftrace.traffic import DataInfo, DataInfoHost, Host, TrafficDirection, TransProtocol

# Addresses longer than this get a wider column in the textual report.
LONG_ADDRESS_THRESHOLD = 25
_NARROW_COLUMN = 25
_WIDE_COLUMN = 45


@dataclass(frozen=True)
class AddressPortPair:
    """Source and destination address:port of a connection, with its transport protocol."""

    address1: str
    port1: int
    address2: str
    port2: int
    trans_protocol: TransProtocol

    def __str__(self) -> str:
        long_address = (
            len(self.address1) > LONG_ADDRESS_THRESHOLD
            or len(self.address2) > LONG_ADDRESS_THRESHOLD
        )
        width = _WIDE_COLUMN if long_address else _NARROW_COLUMN
        return (
            f"|{self.address1:^{width}}|{self.port1:>8}  "
            f"|{self.address2:^{width}}|{self.port2:>8}  "
            f"|   {self.trans_protocol}   |"
        )

    def print_gui(self) -> str:
        """The report line without column separators."""
        return str(self).replace("|", "")


def _epoch() -> datetime:
    return datetime.fromtimestamp(0, tz=timezone.utc).astimezone()


@dataclass
class InfoAddressPortPair:
    """Statistics about the traffic exchanged by one address:port pair."""

    mac_address1: str = ""
    mac_address2: str = ""
    transmitted_bytes: int = 0
    transmitted_packets: int = 0
    initial_timestamp: datetime = field(default_factory=_epoch)
    final_timestamp: datetime = field(default_factory=_epoch)
    app_protocol: AppProtocol = AppProtocol.Other
    very_long_address: bool = False
    index: int = 0
    traffic_direction: TrafficDirection = TrafficDirection.Incoming


@dataclass
class InfoTraffic:
    """Traffic state shared between the capturing side and its consumers.

    ``map`` keeps connections in insertion order; ``lock`` guards concurrent access.
    """

    tot_received_bytes: int = 0
    tot_sent_bytes: int = 0
    tot_received_packets: int = 0
    tot_sent_packets: int = 0
    all_packets: int = 0
    all_bytes: int = 0
    dropped_packets: int = 0
    map: dict[AddressPortPair, InfoAddressPortPair] = field(default_factory=dict)
    addresses_last_interval: set[int] = field(default_factory=set)
    favorite_hosts: set[Host] = field(default_factory=set)
    favorites_last_interval: set[Host] = field(default_factory=set)
    app_protocols: dict[AppProtocol, DataInfo] = field(default_factory=dict)
    addresses_waiting_resolution: dict[str, DataInfo] = field(default_factory=dict)
    addresses_resolved: dict[str, tuple[str, Host]] = field(default_factory=dict)
    hosts: dict[Host, DataInfoHost] = field(default_factory=dict)
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )