"""Application layer protocols and their well-known ports."""

from __future__ import annotations

from enum import Enum


class AppProtocol(Enum):
    """Application layer protocols that can be recognised from a port number."""

    FTP = "FTP"
    SSH = "SSH"
    Telnet = "Telnet"
    SMTP = "SMTP"
    TACACS = "TACACS"
    DNS = "DNS"
    DHCP = "DHCP"
    TFTP = "TFTP"
    HTTP = "HTTP"
    POP = "POP"
    NTP = "NTP"
    NetBIOS = "NetBIOS"
    POP3S = "POP3S"
    IMAP = "IMAP"
    SNMP = "SNMP"
    BGP = "BGP"
    LDAP = "LDAP"
    HTTPS = "HTTPS"
    LDAPS = "LDAPS"
    FTPS = "FTPS"
    mDNS = "mDNS"
    IMAPS = "IMAPS"
    SSDP = "SSDP"
    XMPP = "XMPP"
    Other = "Other"

    def __str__(self) -> str:
        return "-" if self is AppProtocol.Other else self.name


# Order in which protocols are offered for selection.
APP_PROTOCOL_CHOICES: tuple[AppProtocol, ...] = (
    AppProtocol.Other,
    AppProtocol.BGP,
    AppProtocol.DHCP,
    AppProtocol.DNS,
    AppProtocol.FTP,
    AppProtocol.FTPS,
    AppProtocol.HTTP,
    AppProtocol.HTTPS,
    AppProtocol.IMAP,
    AppProtocol.IMAPS,
    AppProtocol.LDAP,
    AppProtocol.LDAPS,
    AppProtocol.mDNS,
    AppProtocol.NetBIOS,
    AppProtocol.NTP,
    AppProtocol.POP,
    AppProtocol.POP3S,
    AppProtocol.SMTP,
    AppProtocol.SNMP,
    AppProtocol.SSDP,
    AppProtocol.SSH,
    AppProtocol.TACACS,
    AppProtocol.Telnet,
    AppProtocol.TFTP,
    AppProtocol.XMPP,
)

_SINGLE_PORTS: dict[int, AppProtocol] = {
    20: AppProtocol.FTP,
    21: AppProtocol.FTP,
    22: AppProtocol.SSH,
    23: AppProtocol.Telnet,
    25: AppProtocol.SMTP,
    49: AppProtocol.TACACS,
    53: AppProtocol.DNS,
    67: AppProtocol.DHCP,
    68: AppProtocol.DHCP,
    69: AppProtocol.TFTP,
    80: AppProtocol.HTTP,
    8080: AppProtocol.HTTP,
    109: AppProtocol.POP,
    110: AppProtocol.POP,
    123: AppProtocol.NTP,
    137: AppProtocol.NetBIOS,
    138: AppProtocol.NetBIOS,
    139: AppProtocol.NetBIOS,
    143: AppProtocol.IMAP,
    220: AppProtocol.IMAP,
    161: AppProtocol.SNMP,
    162: AppProtocol.SNMP,
    199: AppProtocol.SNMP,
    179: AppProtocol.BGP,
    389: AppProtocol.LDAP,
    443: AppProtocol.HTTPS,
    636: AppProtocol.LDAPS,
    989: AppProtocol.FTPS,
    990: AppProtocol.FTPS,
    993: AppProtocol.IMAPS,
    995: AppProtocol.POP3S,
    1900: AppProtocol.SSDP,
    5222: AppProtocol.XMPP,
    5353: AppProtocol.mDNS,
}


def from_port_to_application_protocol(port: int) -> AppProtocol:
    """Map a transport layer port to its application protocol, or ``Other``."""
    return _SINGLE_PORTS.get(port, AppProtocol.Other)