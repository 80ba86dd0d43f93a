"""
Console client for the QT clustering server.

Usage:
    qtminer-client HOST PORT
"""

from typing import Callable, Optional, Sequence, Tuple
import argparse
import math
import socket

from .exceptions import QTMinerError
from .server.protocol import (
    CLUSTER, LOAD_CLUSTERS, OK, SAVE_CLUSTERS, SELECT_TABLE, ObjectStream,
)


class ServerError(QTMinerError):
    """The server answered a request with an error description."""


class QTClient:
    """Blocking client speaking the session protocol."""

    def __init__(self, host: str, port: int, timeout: Optional[float] = None):
        self.sock = socket.create_connection((host, port), timeout=timeout)
        self._rfile = self.sock.makefile('rb')
        self._wfile = self.sock.makefile('wb')
        self.stream = ObjectStream(self._rfile, self._wfile)

    def close(self) -> None:
        self._rfile.close()
        self._wfile.close()
        self.sock.close()

    def __enter__(self) -> 'QTClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _request(self, command: int, payload) -> None:
        self.stream.write(command, payload)
        result = self.stream.read()
        if result != OK:
            raise ServerError(result)

    def select_table(self, table_name: str) -> str:
        """Select a table; returns the server's dump of its records."""
        self._request(SELECT_TABLE, table_name)
        return self.stream.read()

    def cluster(self, radius: float) -> Tuple[int, str]:
        """Cluster the selected table; returns (cluster count, report)."""
        self._request(CLUSTER, float(radius))
        n_clusters = self.stream.read()
        return n_clusters, self.stream.read()

    def save_clusters(self, file_name: str) -> None:
        self._request(SAVE_CLUSTERS, file_name)

    def load_clusters(self, file_name: str) -> str:
        """Load clusters from a server-side file; returns the report."""
        self._request(LOAD_CLUSTERS, file_name)
        return self.stream.read()


def read_radius(prompt: Callable[[str], str] = input) -> float:
    """Ask until the user types a number greater than 0."""
    while True:
        text = prompt("Radius (>0): ")
        try:
            radius = float(text)
        except ValueError:
            radius = math.nan
        if math.isfinite(radius) and radius > 0:
            return radius
        print("Invalid input. Enter a number greater than 0.")


def _ask_yes(prompt: Callable[[str], str], question: str) -> bool:
    while True:
        answer = prompt(question).strip().lower()
        if answer in ('y', 'n'):
            return answer == 'y'


def _menu(prompt: Callable[[str], str]) -> str:
    while True:
        print("\nChoose an option:")
        print("(1) Load clusters from file")
        print("(2) Discover clusters from a table")
        choice = prompt("Answer (1/2): ").strip()
        if choice in ('1', '2'):
            return choice


def run_console(client: QTClient, prompt: Callable[[str], str] = input) -> None:
    """Interactive loop; every server error is shown and the user re-prompted."""
    while True:
        if _menu(prompt) == '1':
            try:
                print(client.load_clusters(prompt("Cluster file name: ").strip()))
            except ServerError as e:
                print(f"Error: {e}")
        else:
            table_name = prompt("Table name: ").strip()
            try:
                print("\nTable data:\n" + client.select_table(table_name))
            except ServerError as e:
                print(f"Error: {e}")
            else:
                while True:
                    radius = read_radius(prompt)
                    try:
                        n_clusters, report = client.cluster(radius)
                        print(f"\nNumber of clusters: {n_clusters}")
                        print(report)
                        default_name = f"{table_name}{radius}.dmp"
                        file_name = prompt(
                            f"File name to save (empty for {default_name}): ").strip()
                        client.save_clusters(file_name or default_name)
                        print("Saved.")
                    except ServerError as e:
                        print(f"Error: {e}")
                    if not _ask_yes(prompt, "Run again with another radius? (y/n): "):
                        break
        if not _ask_yes(prompt, "Another operation? (y/n): "):
            return


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="QT clustering console client")
    parser.add_argument('host', help="Server address")
    parser.add_argument('port', type=int, help="Server port")
    args = parser.parse_args(argv)

    try:
        with QTClient(args.host, args.port) as client:
            run_console(client)
    except (EOFError, ConnectionError):
        print("Connection closed by the server.")
    except OSError as e:
        print(f"Communication error: {e}")
    print("Bye.")


if __name__ == '__main__':
    main()
