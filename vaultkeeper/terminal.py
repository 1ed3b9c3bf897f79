"""Interactive line client: relays a terminal to the vault server and back."""

from __future__ import annotations

import argparse
import os
import select
import socket
import sys

PORT = 8341
SIZE = 1024


def relay(source, sock, sink) -> bool:
    """Shuttle bytes between ``source`` and ``sock``, writing replies to ``sink``.

    Returns True when the server closed after our input ended, False when it
    closed first.
    """
    source_fd = source.fileno()
    source_open = True
    while True:
        watched = [sock, source_fd] if source_open else [sock]
        ready, _, _ = select.select(watched, [], [])

        if sock in ready:
            try:
                data = sock.recv(SIZE)
            except ConnectionResetError:
                data = b""
            if not data:
                if not source_open:
                    return True
                print("str_cli server terminated prematurely", file=sys.stderr)
                return False
            sink.write(data)
            sink.flush()

        if source_open and source_fd in ready:
            data = os.read(source_fd, SIZE)
            if not data:
                source_open = False
                sock.shutdown(socket.SHUT_WR)
                continue
            try:
                sock.sendall(data)
            except BrokenPipeError:
                sink.write(b"Signal is good!")
                sink.flush()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="vaultkeeper-terminal", description="Talk to a vault server."
    )
    parser.add_argument("address", help="IPv4 address of the server")
    parser.add_argument("--port", type=int, default=PORT)
    args = parser.parse_args(argv)

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.connect((args.address, args.port))
        except OSError as exc:
            print(f"cannot connect to {args.address}:{args.port}: {exc}", file=sys.stderr)
            return 1
        relay(sys.stdin, sock, sys.stdout.buffer)
    return 0


if __name__ == "__main__":
    sys.exit(main())