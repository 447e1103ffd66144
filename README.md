# snifftrace

`snifftrace` keeps the books for observed network traffic. It does not
capture packets. Your capture layer passes in addresses, ports and byte
counts. `snifftrace` turns them into:

- connection tables;
- statistics per host and per application protocol;
- threshold and favourite-host notifications;
- filtered, sorted and paged reports.

## Installation

```
pip install snifftrace
```

The package has no runtime dependencies. To run the tests, install the
`test` extra and run `pytest`:

```
pip install "snifftrace[test]"
pytest
```

## Modules

### `snifftrace.app_protocol`

- `AppProtocol` lists well-known application protocols. Its `str()` is the protocol name, or `-` for `Other`.
- `from_port_to_application_protocol(port)` maps a port number to a protocol. Unknown ports give `AppProtocol.Other`.

### `snifftrace.byte_multiple`

- `ByteMultiple` has the members `B`, `KB`, `MB` and `GB`.
  - `get_multiplier()` gives the size in bytes: 1, 1 000, 1 000 000 or 1 000 000 000.
  - `get_char()` gives the suffix: `""`, `K`, `M` or `G`.
- `from_char_to_multiple(ch)` reads a suffix character in either case. Any other character gives `B`.

### `snifftrace.traffic`

This module holds the basic value types.

- Enums:
  - `TransProtocol` and `IpVersion`. In both, `Other` means "no restriction" when used as a filter.
  - `TrafficDirection`, `TrafficType` and `Status`.
- `Asn` and `Host` are frozen, hashable dataclasses that describe a remote host.
- `DataInfo` counts incoming and outgoing packets and bytes. It has `tot_packets()` and `tot_bytes()`.
- `DataInfoHost` holds a host's `DataInfo` together with its favourite, local and traffic-type flags.
- `Filters`, `SearchParameters` and `FilterInputType` describe filtering and searching.
- `DeviceAddress` is one address of an interface: address, netmask, broadcast and destination. String values are parsed, and invalid ones raise `ValueError`.
- `MyDevice` is an interface name with its description and a list of `DeviceAddress`.

### `snifftrace.connections`

- `AddressPortPair` is the frozen key of a connection.
  - `str()` renders it as a fixed-width report row.
  - `print_gui()` renders the same row without the `|` separators.
- `InfoAddressPortPair` holds one connection's statistics.
- `InfoTraffic` is the traffic state shared between the capturing side and its readers.
  - Its `map` keeps connections in insertion order.
  - Its `lock` (an `RLock`) guards access from several threads.

### `snifftrace.notifications`

- Notification settings:
  - `PacketsNotification` and `BytesNotification`. Each has a `from_input(value, existing)` class method that parses user text such as `"500k"` or `"420 m"`. Text that cannot be parsed keeps the previous threshold.
  - `FavoriteNotification`, with the `on(sound)` and `off(sound)` class methods.
  - `Notifications` combines the three settings with a volume.
- `Sound` names a notification sound: `Gulp`, `Pop`, `Swhoosh` or `NONE`.
- Logged events: `PacketsThresholdExceeded`, `BytesThresholdExceeded` and `FavoriteTransmitted`.

### `snifftrace.address_format`

- `mac_from_dec_to_hex(octets)` formats six octets as a MAC address.
- `ipv4_from_octets(octets)` formats four octets as an IPv4 address.
- `ipv6_from_long_dec_to_short_hex(octets)` formats sixteen octets as a compressed IPv6 address.

A sequence of the wrong length, or an octet outside 0..=255, raises `ValueError`.

### `snifftrace.manage_packets`

- `application_protocol_for_ports(port1, port2)` looks at the source port first, then the destination port.
- Direction and type of traffic:
  - `get_traffic_direction`
  - `get_traffic_type`
  - `is_multicast_address`
  - `is_broadcast_address`
- Locality and ownership:
  - `is_local_connection` is true for a link-local address or one in the same subnet as an interface address.
  - `is_my_address`
- `get_address_to_lookup(key, direction)` gives the remote address of a connection.
- `modify_or_insert_in_map(info_traffic, key, interface_addresses, mac_addresses, exchanged_bytes, app_protocol)` records one packet and returns a copy of the connection's updated statistics.

### `snifftrace.notify_and_log`

- `RunTimeData` holds the totals shown to the user. It also holds the notification log, newest first, which keeps at most 30 entries.
- `notify_and_log(runtime_data, notifications, info_traffic, play_sound=None)` logs the notifications due in the current interval and returns how many it emitted.
  - It plays at most one sound per call.
  - The sound goes through the optional `play_sound(sound, volume)` callback.

### `snifftrace.report`

- `get_searched_entries(info_traffic, search, sort_type, page_number)` returns `(entries, total)`.
  - Each entry is `(key, info, host, host_info)`.
  - Pages hold 20 entries and are numbered from 1.
  - `ReportSortType` chooses the order: most recent, most bytes or most packets.
- `get_host_entries(info_traffic, metric)` returns at most the 30 busiest hosts.
- `get_app_entries(info_traffic, metric)` returns every protocol, with `Other` always last.
- Both rankings order by `EntryMetric.Packets` or `EntryMetric.Bytes`.

## Example

```python
from snifftrace.address_format import ipv6_from_long_dec_to_short_hex, mac_from_dec_to_hex
from snifftrace.app_protocol import from_port_to_application_protocol
from snifftrace.manage_packets import get_traffic_type, is_local_connection
from snifftrace.notifications import BytesNotification
from snifftrace.traffic import DeviceAddress, TrafficDirection

ipv6_from_long_dec_to_short_hex(
    [255, 10, 10, 255, 0, 0, 0, 0, 28, 4, 4, 28, 255, 1, 0, 0]
)  # 'ff0a:aff::1c04:41c:ff01:0'
mac_from_dec_to_hex([0, 0, 0, 0, 0, 0])  # '00:00:00:00:00:00'
from_port_to_application_protocol(443)  # AppProtocol.HTTPS

BytesNotification.from_input("500k", None).threshold  # 500000

local = [DeviceAddress("172.20.10.9", netmask="255.255.255.240",
                       broadcast_addr="172.20.10.15")]
is_local_connection("172.20.10.7", local)  # True
get_traffic_type("172.20.10.15", local, TrafficDirection.Outgoing)  # TrafficType.Broadcast
```

## What it does not do

`snifftrace` handles bookkeeping only. It does not:

- capture packets or list network interfaces;
- parse packet headers, beyond formatting raw address octets;
- perform reverse DNS, country or ASN lookups. It reads only what you store in `InfoTraffic.addresses_resolved` and `InfoTraffic.hosts`;
- play sounds. Pass your own `play_sound` callback to `notify_and_log`;
- write report files, store settings, or provide a command or a graphical interface.