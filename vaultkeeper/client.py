"""A connected peer: its socket, its address and the user it logged in as."""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass


@dataclass(eq=False)
class Client:
    """A peer connection; two clients are equal when they share a socket."""

    sock: socket.socket
    address: tuple = ()
    id: int = -1

    def host(self) -> str:
        """The peer's IPv4 or IPv6 address as text, or "" when there is none."""
        if not self.address or not isinstance(self.address[0], str):
            return ""
        try:
            return str(ipaddress.ip_address(self.address[0]))
        except ValueError:
            return ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Client):
            return NotImplemented
        return self.sock is other.sock

    def __hash__(self) -> int:
        return hash(self.sock)