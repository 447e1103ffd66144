"""Basic value types describing observed network traffic."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

from snifftrace.app_protocol import AppProtocol

IpAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class TransProtocol(Enum):
    """Transport layer protocol."""

    TCP = "TCP"
    UDP = "UDP"
    Other = "Other"

    def __str__(self) -> str:
        return self.name


TRANS_PROTOCOL_CHOICES: tuple[TransProtocol, ...] = (
    TransProtocol.TCP,
    TransProtocol.UDP,
    TransProtocol.Other,
)


class IpVersion(Enum):
    """Internet Protocol version."""

    IPv4 = "IPv4"
    IPv6 = "IPv6"
    Other = "Other"

    def __str__(self) -> str:
        return self.name


IP_VERSION_CHOICES: tuple[IpVersion, ...] = (
    IpVersion.IPv4,
    IpVersion.IPv6,
    IpVersion.Other,
)


class TrafficDirection(Enum):
    """Direction of traffic relative to the local interface; ``Incoming`` is the default."""

    Incoming = auto()
    Outgoing = auto()


class TrafficType(Enum):
    """Kind of traffic towards the remote host; ``Unicast`` is the default."""

    Unicast = auto()
    Multicast = auto()
    Broadcast = auto()


class Status(Enum):
    """State of the sniffing process."""

    Init = auto()
    Running = auto()


@dataclass(frozen=True)
class Asn:
    """An Autonomous System."""

    number: int = 0
    name: str = ""


@dataclass(frozen=True)
class Host:
    """A remote network host."""

    domain: str = ""
    asn: Asn = field(default_factory=Asn)
    country: str = ""


@dataclass
class DataInfo:
    """Incoming and outgoing packet and byte counts."""

    incoming_packets: int = 0
    outgoing_packets: int = 0
    incoming_bytes: int = 0
    outgoing_bytes: int = 0

    def tot_packets(self) -> int:
        """Packets in both directions."""
        return self.incoming_packets + self.outgoing_packets

    def tot_bytes(self) -> int:
        """Bytes in both directions."""
        return self.incoming_bytes + self.outgoing_bytes


@dataclass
class DataInfoHost:
    """Traffic and classification of one host."""

    data_info: DataInfo = field(default_factory=DataInfo)
    is_favorite: bool = False
    is_local: bool = False
    traffic_type: TrafficType = TrafficType.Unicast


@dataclass
class Filters:
    """Filters applied to captured traffic; ``Other`` means no restriction."""

    ip: IpVersion = IpVersion.Other
    transport: TransProtocol = TransProtocol.Other
    application: AppProtocol = AppProtocol.Other


@dataclass(frozen=True)
class SearchParameters:
    """Search filters of the connection inspection view."""

    app: str = ""
    domain: str = ""
    country: str = ""
    as_name: str = ""
    only_favorites: bool = False


class FilterInputType(Enum):
    """Which search field a text input refers to."""

    App = auto()
    Domain = auto()
    Country = auto()
    AS = auto()


def _to_ip(value: Union[str, IpAddress, None]) -> Optional[IpAddress]:
    if value is None or isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return value
    return ipaddress.ip_address(value)


@dataclass(frozen=True)
class DeviceAddress:
    """One address assigned to a network interface.

    Addresses may be given as strings; they are parsed and invalid ones raise ``ValueError``.
    """

    addr: IpAddress
    netmask: Optional[IpAddress] = None
    broadcast_addr: Optional[IpAddress] = None
    dst_addr: Optional[IpAddress] = None

    def __post_init__(self) -> None:
        for name in ("addr", "netmask", "broadcast_addr", "dst_addr"):
            object.__setattr__(self, name, _to_ip(getattr(self, name)))
        if self.addr is None:
            raise ValueError("a device address needs an address")


@dataclass
class MyDevice:
    """The network interface being inspected, with its current addresses."""

    name: str
    desc: Optional[str] = None
    addresses: list[DeviceAddress] = field(default_factory=list)