"""Selection, sorting and paging of connections, hosts and protocols for display."""

from __future__ import annotations

import copy
from dataclasses import replace
from enum import Enum, auto

from snifftrace.app_protocol import AppProtocol
from snifftrace.connections import AddressPortPair, InfoAddressPortPair, InfoTraffic
from snifftrace.manage_packets import get_address_to_lookup
from snifftrace.traffic import DataInfo, DataInfoHost, Host, SearchParameters

# Number of connections per page of search results.
PAGE_SIZE = 20
# Maximum number of hosts returned by get_host_entries.
MAX_HOST_ENTRIES = 30

SearchedEntry = tuple[AddressPortPair, InfoAddressPortPair, Host, DataInfoHost]


class ReportSortType(Enum):
    """Order in which connections are listed."""

    MostRecent = auto()
    MostBytes = auto()
    MostPackets = auto()


class EntryMetric(Enum):
    """Quantity by which hosts and protocols are ranked."""

    Packets = auto()
    Bytes = auto()


def _metric(data_info: DataInfo, metric: EntryMetric) -> int:
    if metric is EntryMetric.Packets:
        return data_info.tot_packets()
    return data_info.tot_bytes()


def _matches(
    info_traffic: InfoTraffic,
    key: AddressPortPair,
    value: InfoAddressPortPair,
    search: SearchParameters,
) -> bool:
    resolved = info_traffic.addresses_resolved.get(
        get_address_to_lookup(key, value.traffic_direction)
    )
    host_filter_active = bool(
        search.domain or search.country or search.as_name or search.only_favorites
    )
    if resolved is None:
        return not host_filter_active and _app_matches(value, search)
    r_dns, host = resolved
    if not _app_matches(value, search):
        return False
    if search.domain and search.domain.lower() not in r_dns.lower():
        return False
    if search.country and not host.country.lower().startswith(search.country.lower()):
        return False
    if search.as_name and search.as_name.lower() not in host.asn.name.lower():
        return False
    if search.only_favorites and not info_traffic.hosts[host].is_favorite:
        return False
    return True


def _app_matches(value: InfoAddressPortPair, search: SearchParameters) -> bool:
    return not search.app or value.app_protocol.name.lower() == search.app.lower()


def _sort_key(report_sort_type: ReportSortType):
    if report_sort_type is ReportSortType.MostRecent:
        return lambda item: item[1].final_timestamp
    if report_sort_type is ReportSortType.MostBytes:
        return lambda item: item[1].transmitted_bytes
    return lambda item: item[1].transmitted_packets


def get_searched_entries(
    info_traffic: InfoTraffic,
    search: SearchParameters,
    report_sort_type: ReportSortType,
    page_number: int,
) -> tuple[list[SearchedEntry], int]:
    """Connections matching ``search`` on the given page (from 1), and the total matching.

    Each entry carries copies of the connection key, its statistics, its remote host and
    that host's data; unresolved hosts appear as default values.
    """
    if page_number < 1:
        raise ValueError("page numbers start at 1")
    with info_traffic.lock:
        matching = [
            (key, value)
            for key, value in info_traffic.map.items()
            if _matches(info_traffic, key, value, search)
        ]
        matching.sort(key=_sort_key(report_sort_type), reverse=True)

        start = (page_number - 1) * PAGE_SIZE
        page = matching[start:page_number * PAGE_SIZE]

        entries: list[SearchedEntry] = []
        for key, value in page:
            resolved = info_traffic.addresses_resolved.get(
                get_address_to_lookup(key, value.traffic_direction)
            )
            host = resolved[1] if resolved is not None else Host()
            host_info = info_traffic.hosts.get(host, DataInfoHost())
            entries.append((key, replace(value), host, copy.deepcopy(host_info)))
        return entries, len(matching)


def get_host_entries(
    info_traffic: InfoTraffic, metric: EntryMetric
) -> list[tuple[Host, DataInfoHost]]:
    """The busiest hosts by ``metric``, most active first, at most ``MAX_HOST_ENTRIES``."""
    with info_traffic.lock:
        ranked = sorted(
            info_traffic.hosts.items(),
            key=lambda item: _metric(item[1].data_info, metric),
            reverse=True,
        )
        return [(host, copy.deepcopy(info)) for host, info in ranked[:MAX_HOST_ENTRIES]]


def get_app_entries(
    info_traffic: InfoTraffic, metric: EntryMetric
) -> list[tuple[AppProtocol, DataInfo]]:
    """Application protocols by ``metric``, most active first, with ``Other`` always last."""
    with info_traffic.lock:
        ranked = sorted(
            info_traffic.app_protocols.items(),
            key=lambda item: (item[0] is AppProtocol.Other, -_metric(item[1], metric)),
        )
        return [(protocol, replace(info)) for protocol, info in ranked]