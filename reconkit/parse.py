"""Comma-separated command-line values that accumulate over repeated use."""

from __future__ import annotations

import ipaddress
import re

from .network import range_hosts

_INT_RE = re.compile(r"[+-]?[0-9]+")


class ParseStrings(list):
    """A list of strings filled from comma-separated values."""

    def __str__(self) -> str:
        return ",".join(self)

    def set(self, s: str) -> None:
        if not s:
            raise ValueError("String parsing failed")
        self.extend(part.strip() for part in s.split(","))


class ParseInts(list):
    """A list of integers filled from comma-separated values."""

    def __str__(self) -> str:
        return ",".join(str(n) for n in self)

    def set(self, s: str) -> None:
        if not s:
            raise ValueError("Integer parsing failed")
        for part in s.split(","):
            text = part.strip()
            if not _INT_RE.fullmatch(text):
                raise ValueError(f"invalid integer: {text!r}")
            self.append(int(text))


class ParseIPs(list):
    """A list of IP addresses filled from addresses and ranges such as 10.0.0.1-254."""

    def __str__(self) -> str:
        return ",".join(str(ip) for ip in self)

    def set(self, s: str) -> None:
        if not s:
            raise ValueError("IP address parsing failed")
        for item in s.split(","):
            addresses = self._parse_range(item)
            if addresses:
                self.extend(addresses)
                continue
            try:
                self.append(ipaddress.ip_address(item))
            except ValueError:
                raise ValueError(f"{item} is not a valid IP address or range") from None

    @staticmethod
    def _parse_range(s: str) -> list:
        parts = s.split("-")
        if len(parts) < 2:
            return []
        try:
            start = ipaddress.ip_address(parts[0])
        except ValueError:
            return []
        try:
            end = ipaddress.ip_address(parts[1])
        except ValueError:
            if not _INT_RE.fullmatch(parts[1]):
                return []
            end = type(start)((int(start) & ~0xFF) | (int(parts[1]) & 0xFF))
        return range_hosts(start, end)


class ParseCIDRs(list):
    """A list of netblocks filled from comma-separated CIDR notation."""

    def __str__(self) -> str:
        return ",".join(str(net) for net in self)

    def set(self, s: str) -> None:
        if not s:
            raise ValueError(f"{s} is not a valid CIDR")
        for cidr in s.split(","):
            if "/" not in cidr:
                raise ValueError(f"Failed to parse {cidr} as a CIDR")
            try:
                self.append(ipaddress.ip_network(cidr, strict=False))
            except ValueError:
                raise ValueError(f"Failed to parse {cidr} as a CIDR") from None