from datetime import datetime, timedelta

import pytest

from snifftrace.app_protocol import AppProtocol
from snifftrace.connections import AddressPortPair, InfoAddressPortPair, InfoTraffic
from snifftrace.report import (
    MAX_HOST_ENTRIES,
    PAGE_SIZE,
    EntryMetric,
    ReportSortType,
    get_app_entries,
    get_host_entries,
    get_searched_entries,
)
from snifftrace.traffic import (
    Asn,
    DataInfo,
    DataInfoHost,
    Host,
    SearchParameters,
    TrafficDirection,
    TransProtocol,
)

BASE_TIME = datetime(2023, 1, 1, 12, 0, 0)


def _add(traffic, n, *, bytes_=0, packets=0, seconds=0, app=AppProtocol.Other):
    key = AddressPortPair(f"10.0.0.{n}", 1000 + n, "192.168.1.1", 443, TransProtocol.TCP)
    traffic.map[key] = InfoAddressPortPair(
        transmitted_bytes=bytes_,
        transmitted_packets=packets,
        final_timestamp=BASE_TIME + timedelta(seconds=seconds),
        app_protocol=app,
        traffic_direction=TrafficDirection.Incoming,
        index=len(traffic.map),
    )
    return key


def _resolve(traffic, key, r_dns, host, favorite=False):
    traffic.addresses_resolved[key.address1] = (r_dns, host)
    traffic.hosts[host] = DataInfoHost(is_favorite=favorite)


def _keys(entries):
    return [entry[0] for entry in entries]


def test_sort_by_bytes_and_packets():
    traffic = InfoTraffic()
    a = _add(traffic, 1, bytes_=10, packets=30)
    b = _add(traffic, 2, bytes_=30, packets=10)
    c = _add(traffic, 3, bytes_=20, packets=20)
    by_bytes, total = get_searched_entries(
        traffic, SearchParameters(), ReportSortType.MostBytes, 1
    )
    assert total == 3
    assert _keys(by_bytes) == [b, c, a]
    by_packets, _ = get_searched_entries(
        traffic, SearchParameters(), ReportSortType.MostPackets, 1
    )
    assert _keys(by_packets) == [a, c, b]


def test_sort_by_most_recent():
    traffic = InfoTraffic()
    old = _add(traffic, 1, seconds=1)
    new = _add(traffic, 2, seconds=5)
    entries, _ = get_searched_entries(
        traffic, SearchParameters(), ReportSortType.MostRecent, 1
    )
    assert _keys(entries) == [new, old]


def test_pagination():
    traffic = InfoTraffic()
    count = PAGE_SIZE + 5
    for n in range(count):
        _add(traffic, n, bytes_=n)
    first, total = get_searched_entries(
        traffic, SearchParameters(), ReportSortType.MostBytes, 1
    )
    second, _ = get_searched_entries(
        traffic, SearchParameters(), ReportSortType.MostBytes, 2
    )
    third, _ = get_searched_entries(
        traffic, SearchParameters(), ReportSortType.MostBytes, 3
    )
    assert total == count
    assert len(first) == PAGE_SIZE
    assert len(second) == count - PAGE_SIZE
    assert third == []
    assert set(_keys(first)).isdisjoint(_keys(second))


def test_page_zero_is_rejected():
    with pytest.raises(ValueError):
        get_searched_entries(InfoTraffic(), SearchParameters(), ReportSortType.MostRecent, 0)


def test_app_filter_is_case_insensitive():
    traffic = InfoTraffic()
    https = _add(traffic, 1, app=AppProtocol.HTTPS)
    _add(traffic, 2, app=AppProtocol.DNS)
    entries, total = get_searched_entries(
        traffic, SearchParameters(app="https"), ReportSortType.MostRecent, 1
    )
    assert total == 1
    assert _keys(entries) == [https]


def test_host_filters_exclude_unresolved():
    traffic = InfoTraffic()
    resolved = _add(traffic, 1)
    _add(traffic, 2)
    host = Host(domain="example.com", asn=Asn(number=7, name="Example Net"), country="US")
    _resolve(traffic, resolved, "www.example.com", host)
    for search in (
        SearchParameters(domain="EXAMPLE"),
        SearchParameters(country="u"),
        SearchParameters(as_name="example net"),
    ):
        entries, total = get_searched_entries(traffic, search, ReportSortType.MostRecent, 1)
        assert total == 1
        assert entries[0][0] == resolved
        assert entries[0][2] == host


def test_filters_that_do_not_match():
    traffic = InfoTraffic()
    key = _add(traffic, 1)
    host = Host(domain="example.com", country="US")
    _resolve(traffic, key, "www.example.com", host)
    for search in (
        SearchParameters(domain="example.org"),
        SearchParameters(country="S"),
        SearchParameters(only_favorites=True),
    ):
        assert get_searched_entries(traffic, search, ReportSortType.MostRecent, 1)[1] == 0


def test_only_favorites():
    traffic = InfoTraffic()
    favorite = _add(traffic, 1)
    other = _add(traffic, 2)
    _resolve(traffic, favorite, "a.example.com", Host(domain="a.example.com"), favorite=True)
    _resolve(traffic, other, "b.example.com", Host(domain="b.example.com"))
    entries, total = get_searched_entries(
        traffic, SearchParameters(only_favorites=True), ReportSortType.MostRecent, 1
    )
    assert total == 1
    assert entries[0][0] == favorite
    assert entries[0][3].is_favorite is True


def test_unresolved_entry_has_default_host():
    traffic = InfoTraffic()
    _add(traffic, 1)
    entries, _ = get_searched_entries(
        traffic, SearchParameters(), ReportSortType.MostRecent, 1
    )
    assert entries[0][2] == Host()
    assert entries[0][3] == DataInfoHost()


def test_host_entries_sorted_and_limited():
    traffic = InfoTraffic()
    count = MAX_HOST_ENTRIES + 5
    for n in range(count):
        traffic.hosts[Host(domain=f"h{n}.example.com")] = DataInfoHost(
            data_info=DataInfo(incoming_packets=n, outgoing_bytes=count - n)
        )
    by_packets = get_host_entries(traffic, EntryMetric.Packets)
    assert len(by_packets) == MAX_HOST_ENTRIES
    packets = [info.data_info.tot_packets() for _, info in by_packets]
    assert packets == sorted(packets, reverse=True)
    assert packets[0] == count - 1
    by_bytes = get_host_entries(traffic, EntryMetric.Bytes)
    assert by_bytes[0][0] == Host(domain="h0.example.com")


def test_app_entries_put_other_last():
    traffic = InfoTraffic()
    traffic.app_protocols[AppProtocol.Other] = DataInfo(incoming_packets=100)
    traffic.app_protocols[AppProtocol.DNS] = DataInfo(incoming_packets=5, incoming_bytes=50)
    traffic.app_protocols[AppProtocol.HTTPS] = DataInfo(incoming_packets=10, incoming_bytes=20)
    by_packets = [p for p, _ in get_app_entries(traffic, EntryMetric.Packets)]
    assert by_packets == [AppProtocol.HTTPS, AppProtocol.DNS, AppProtocol.Other]
    by_bytes = [p for p, _ in get_app_entries(traffic, EntryMetric.Bytes)]
    assert by_bytes == [AppProtocol.DNS, AppProtocol.HTTPS, AppProtocol.Other]


def test_app_entries_are_copies():
    traffic = InfoTraffic()
    traffic.app_protocols[AppProtocol.DNS] = DataInfo(incoming_packets=5)
    entries = get_app_entries(traffic, EntryMetric.Packets)
    entries[0][1].incoming_packets = 99
    assert traffic.app_protocols[AppProtocol.DNS].incoming_packets == 5