"""Notification settings and the notifications logged when they fire."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from snifftrace.byte_multiple import ByteMultiple, from_char_to_multiple
from snifftrace.traffic import DataInfoHost, Host

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_unsigned(text: str, maximum: int) -> Optional[int]:
    """Strict unsigned integer parsing: no spaces, ASCII digits, within range."""
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= maximum else None


class Sound(Enum):
    """Sounds that may accompany a notification."""

    Gulp = "Gulp"
    Pop = "Pop"
    Swhoosh = "Swhoosh"
    NONE = "None"

    def __str__(self) -> str:
        return self.value


SOUND_CHOICES: tuple[Sound, ...] = (Sound.Gulp, Sound.Pop, Sound.Swhoosh, Sound.NONE)


@dataclass(frozen=True)
class PacketsNotification:
    """Notify when packets in an interval exceed ``threshold`` (``None`` = disabled)."""

    threshold: Optional[int] = None
    sound: Sound = Sound.Gulp
    previous_threshold: int = 750

    @classmethod
    def from_input(
        cls, value: str, existing: Optional[PacketsNotification] = None
    ) -> PacketsNotification:
        """Build from user text, falling back to ``existing`` (or defaults) when unparsable."""
        base = existing if existing is not None else cls()
        if not value:
            new_threshold = 0
        else:
            parsed = _parse_unsigned(value, _U32_MAX)
            new_threshold = base.previous_threshold if parsed is None else parsed
        return replace(base, threshold=new_threshold, previous_threshold=new_threshold)


@dataclass(frozen=True)
class BytesNotification:
    """Notify when bytes in an interval exceed ``threshold`` (``None`` = disabled)."""

    threshold: Optional[int] = None
    byte_multiple: ByteMultiple = ByteMultiple.KB
    sound: Sound = Sound.Pop
    previous_threshold: int = 800_000

    @classmethod
    def from_input(
        cls, value: str, existing: Optional[BytesNotification] = None
    ) -> BytesNotification:
        """Build from user text such as ``"500k"``; unparsable text keeps previous values."""
        base = existing if existing is not None else cls()
        multiple = ByteMultiple.B
        if not value:
            new_threshold = 0
        elif all(ch.isnumeric() for ch in value.strip()):
            parsed = _parse_unsigned(value, _U64_MAX)
            new_threshold = base.previous_threshold if parsed is None else parsed
        else:
            multiple = from_char_to_multiple(value[-1])
            number_text = value[:-1].strip()
            number = _parse_unsigned(number_text, _U64_MAX)
            if number is not None and number * multiple.get_multiplier() <= _U64_MAX:
                new_threshold = number * multiple.get_multiplier()
            elif not number_text:
                multiple = ByteMultiple.B
                new_threshold = 0
            else:
                multiple = base.byte_multiple
                new_threshold = base.previous_threshold
        return replace(
            base,
            threshold=new_threshold,
            previous_threshold=new_threshold,
            byte_multiple=multiple,
        )


@dataclass(frozen=True)
class FavoriteNotification:
    """Notify when a favorite host exchanges data."""

    notify_on_favorite: bool = False
    sound: Sound = Sound.Swhoosh

    @classmethod
    def on(cls, sound: Sound) -> FavoriteNotification:
        """An enabled favorite notification."""
        return cls(notify_on_favorite=True, sound=sound)

    @classmethod
    def off(cls, sound: Sound) -> FavoriteNotification:
        """A disabled favorite notification that remembers its sound."""
        return cls(notify_on_favorite=False, sound=sound)


@dataclass
class Notifications:
    """The user's whole notification configuration."""

    volume: int = 60
    packets_notification: PacketsNotification = field(default_factory=PacketsNotification)
    bytes_notification: BytesNotification = field(default_factory=BytesNotification)
    favorite_notification: FavoriteNotification = field(default_factory=FavoriteNotification)


@dataclass(frozen=True)
class PacketsThresholdExceeded:
    """Logged event: the packets threshold was exceeded."""

    threshold: int
    incoming: int
    outgoing: int
    timestamp: str


@dataclass(frozen=True)
class BytesThresholdExceeded:
    """Logged event: the bytes threshold was exceeded."""

    threshold: int
    byte_multiple: ByteMultiple
    incoming: int
    outgoing: int
    timestamp: str


@dataclass(frozen=True)
class FavoriteTransmitted:
    """Logged event: a favorite host exchanged data."""

    host: Host
    data_info_host: DataInfoHost
    timestamp: str


LoggedNotification = Union[PacketsThresholdExceeded, BytesThresholdExceeded, FavoriteTransmitted]