"""Classification of observed traffic and bookkeeping of connections."""

from __future__ import annotations

import ipaddress
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime

from snifftrace.app_protocol import AppProtocol, from_port_to_application_protocol
from snifftrace.connections import (
    LONG_ADDRESS_THRESHOLD,
    AddressPortPair,
    InfoAddressPortPair,
    InfoTraffic,
)
from snifftrace.traffic import DeviceAddress, TrafficDirection, TrafficType

_LIMITED_BROADCAST = "255.255.255.255"
_UNSPECIFIED_V4 = "0.0.0.0"
_IPV4_LINK_LOCAL = ipaddress.ip_network("169.254.0.0/16")


def application_protocol_for_ports(port1: int, port2: int) -> AppProtocol:
    """Protocol recognised from the source port, else from the destination port."""
    protocol = from_port_to_application_protocol(port1)
    if protocol is AppProtocol.Other:
        protocol = from_port_to_application_protocol(port2)
    return protocol


def _address_strings(my_interface_addresses: Sequence[DeviceAddress]) -> list[str]:
    return [str(address.addr) for address in my_interface_addresses]


def get_traffic_direction(
    source_ip: str,
    destination_ip: str,
    my_interface_addresses: Sequence[DeviceAddress],
) -> TrafficDirection:
    """Whether the traffic is incoming to or outgoing from the local interface."""
    local = _address_strings(my_interface_addresses)
    if source_ip in local:
        return TrafficDirection.Outgoing
    if source_ip != _UNSPECIFIED_V4:
        return TrafficDirection.Incoming
    # Source is 0.0.0.0: the local interface has no address assigned yet.
    if destination_ip not in local:
        return TrafficDirection.Outgoing
    return TrafficDirection.Incoming


def get_traffic_type(
    destination_ip: str,
    my_interface_addresses: Sequence[DeviceAddress],
    traffic_direction: TrafficDirection,
) -> TrafficType:
    """Unicast, multicast or broadcast, as seen from the remote host."""
    if traffic_direction is not TrafficDirection.Outgoing:
        return TrafficType.Unicast
    if is_multicast_address(destination_ip):
        return TrafficType.Multicast
    if is_broadcast_address(destination_ip, my_interface_addresses):
        return TrafficType.Broadcast
    return TrafficType.Unicast


def is_multicast_address(address: str) -> bool:
    """True for IPv6 addresses starting with ``ff`` and IPv4 addresses in 224..=239.

    Raises ``ValueError`` when an IPv4 address has no valid first octet.
    """
    if ":" in address:
        return address.startswith("ff")
    first_group = address.split(".", 1)[0]
    digits = first_group[1:] if first_group.startswith("+") else first_group
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"invalid IPv4 address: {address!r}")
    value = int(digits)
    if value > 255:
        raise ValueError(f"invalid IPv4 address: {address!r}")
    return 224 <= value <= 239


def is_broadcast_address(
    address: str, my_interface_addresses: Sequence[DeviceAddress]
) -> bool:
    """True for the limited broadcast address or an interface's directed broadcast."""
    if address == _LIMITED_BROADCAST:
        return True
    broadcasts = [
        str(item.broadcast_addr) if item.broadcast_addr is not None else _LIMITED_BROADCAST
        for item in my_interface_addresses
    ]
    return address in broadcasts


def _same_subnet(local: bytes, remote: bytes, netmask: bytes) -> bool:
    return all(
        (mask & mine) == (mask & theirs)
        for mask, mine, theirs in zip(netmask, local, remote)
    )


def _parse_or_zero(address: str, version: int) -> ipaddress._BaseAddress:
    cls = ipaddress.IPv4Address if version == 4 else ipaddress.IPv6Address
    try:
        return cls(address)
    except ValueError:
        return cls(0)


def is_local_connection(
    address_to_lookup: str, my_interface_addresses: Sequence[DeviceAddress]
) -> bool:
    """True if the address is link-local or in the subnet of one of the interface addresses."""
    version = 6 if ":" in address_to_lookup else 4
    remote = _parse_or_zero(address_to_lookup, version)
    for item in my_interface_addresses:
        if item.addr.version != version:
            continue
        if version == 4:
            link_local = remote in _IPV4_LINK_LOCAL
        else:
            link_local = address_to_lookup.startswith("fe80")
        if link_local:
            return True
        netmask = item.netmask
        if netmask is not None and netmask.version == version:
            if _same_subnet(item.addr.packed, remote.packed, netmask.packed):
                return True
    return False


def is_my_address(
    address_to_lookup: str, my_interface_addresses: Sequence[DeviceAddress]
) -> bool:
    """True if the address is one of the interface's own addresses."""
    return address_to_lookup in _address_strings(my_interface_addresses)


def get_address_to_lookup(
    key: AddressPortPair, traffic_direction: TrafficDirection
) -> str:
    """The remote address of a connection: destination if outgoing, source if incoming."""
    if traffic_direction is TrafficDirection.Outgoing:
        return key.address2
    return key.address1


def modify_or_insert_in_map(
    info_traffic: InfoTraffic,
    key: AddressPortPair,
    my_interface_addresses: Sequence[DeviceAddress],
    mac_addresses: tuple[str, str],
    exchanged_bytes: int,
    application_protocol: AppProtocol,
) -> InfoAddressPortPair:
    """Record a packet of the connection ``key`` and return a copy of its updated statistics."""
    now = datetime.now().astimezone()
    very_long_address = (
        len(key.address1) > LONG_ADDRESS_THRESHOLD
        or len(key.address2) > LONG_ADDRESS_THRESHOLD
    )
    traffic_direction = TrafficDirection.Incoming

    with info_traffic.lock:
        keys = list(info_traffic.map)
        existing = info_traffic.map.get(key)
        index = keys.index(key) if existing is not None else len(keys)

        if existing is None:
            traffic_direction = get_traffic_direction(
                key.address1, key.address2, my_interface_addresses
            )
            info = InfoAddressPortPair(
                mac_address1=mac_addresses[0],
                mac_address2=mac_addresses[1],
                transmitted_bytes=exchanged_bytes,
                transmitted_packets=1,
                initial_timestamp=now,
                final_timestamp=now,
                app_protocol=application_protocol,
                very_long_address=very_long_address,
                index=index,
                traffic_direction=traffic_direction,
            )
            info_traffic.map[key] = info
        else:
            existing.transmitted_bytes += exchanged_bytes
            existing.transmitted_packets += 1
            existing.final_timestamp = now
            info = existing

        info_traffic.addresses_last_interval.add(index)

        resolved = info_traffic.addresses_resolved.get(
            get_address_to_lookup(key, traffic_direction)
        )
        if resolved is not None and resolved[1] in info_traffic.favorite_hosts:
            info_traffic.favorites_last_interval.add(resolved[1])

        return replace(info)