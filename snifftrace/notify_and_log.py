"""Runtime statistics and the emission of notifications from them."""

from __future__ import annotations

import copy
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from snifftrace.connections import InfoTraffic
from snifftrace.notifications import (
    BytesThresholdExceeded,
    FavoriteTransmitted,
    LoggedNotification,
    Notifications,
    PacketsThresholdExceeded,
    Sound,
)

# Older notifications are dropped once the log holds this many.
MAX_LOGGED_NOTIFICATIONS = 30
_U32_MAX = 2**32 - 1

SoundPlayer = Callable[[Sound, int], None]


@dataclass
class RunTimeData:
    """Traffic statistics shown to the user and the log of emitted notifications.

    The ``*_prev`` fields hold the totals before the current time interval.
    ``logged_notifications`` holds the newest notification first.
    """

    all_bytes: int = 0
    all_packets: int = 0
    tot_sent_bytes: int = 0
    tot_received_bytes: int = 0
    tot_sent_packets: int = 0
    tot_received_packets: int = 0
    dropped_packets: int = 0
    tot_sent_bytes_prev: int = 0
    tot_received_bytes_prev: int = 0
    tot_sent_packets_prev: int = 0
    tot_received_packets_prev: int = 0
    logged_notifications: deque[LoggedNotification] = field(default_factory=deque)
    tot_emitted_notifications: int = 0


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _as_u32(value: int) -> int:
    if not 0 <= value <= _U32_MAX:
        raise OverflowError(f"{value} does not fit in an unsigned 32-bit counter")
    return value


def _log(runtime_data: RunTimeData, notification: LoggedNotification) -> None:
    log = runtime_data.logged_notifications
    if len(log) >= MAX_LOGGED_NOTIFICATIONS:
        log.pop()
    log.appendleft(notification)


def _play(
    play_sound: Optional[SoundPlayer], sound: Sound, volume: int
) -> None:
    if play_sound is not None and sound is not Sound.NONE and volume != 0:
        play_sound(sound, volume)


def notify_and_log(
    runtime_data: RunTimeData,
    notifications: Notifications,
    info_traffic: InfoTraffic,
    play_sound: Optional[SoundPlayer] = None,
) -> int:
    """Log the notifications due in the current interval and return how many were emitted.

    At most one sound is played per call, through ``play_sound(sound, volume)``.
    """
    already_emitted_sound = False
    emitted = 0

    packets = notifications.packets_notification
    if packets.threshold is not None:
        sent = runtime_data.tot_sent_packets - runtime_data.tot_sent_packets_prev
        received = runtime_data.tot_received_packets - runtime_data.tot_received_packets_prev
        if received + sent > packets.threshold:
            emitted += 1
            _log(
                runtime_data,
                PacketsThresholdExceeded(
                    threshold=packets.previous_threshold,
                    incoming=_as_u32(received),
                    outgoing=_as_u32(sent),
                    timestamp=_timestamp(),
                ),
            )
            if packets.sound is not Sound.NONE:
                _play(play_sound, packets.sound, notifications.volume)
                already_emitted_sound = True

    bytes_notification = notifications.bytes_notification
    if bytes_notification.threshold is not None:
        sent = runtime_data.tot_sent_bytes - runtime_data.tot_sent_bytes_prev
        received = runtime_data.tot_received_bytes - runtime_data.tot_received_bytes_prev
        if received + sent > bytes_notification.threshold:
            emitted += 1
            _log(
                runtime_data,
                BytesThresholdExceeded(
                    threshold=bytes_notification.previous_threshold,
                    byte_multiple=bytes_notification.byte_multiple,
                    incoming=_as_u32(received),
                    outgoing=_as_u32(sent),
                    timestamp=_timestamp(),
                ),
            )
            if not already_emitted_sound and bytes_notification.sound is not Sound.NONE:
                _play(play_sound, bytes_notification.sound, notifications.volume)
                already_emitted_sound = True

    favorite = notifications.favorite_notification
    if favorite.notify_on_favorite:
        with info_traffic.lock:
            favorites = list(info_traffic.favorites_last_interval)
            for host in favorites:
                emitted += 1
                _log(
                    runtime_data,
                    FavoriteTransmitted(
                        host=host,
                        data_info_host=copy.deepcopy(info_traffic.hosts[host]),
                        timestamp=_timestamp(),
                    ),
                )
        if favorites and not already_emitted_sound and favorite.sound is not Sound.NONE:
            _play(play_sound, favorite.sound, notifications.volume)

    return emitted