"""Pool of CDN addresses: hosts waiting to be tested and hosts known to work."""

import random as _random
import socket
import ssl
from collections import deque

PEER_NAME = "kyfw.12306.cn"
PORT = 443
TEST_TIMEOUT = 3.0


def probe(host, port=PORT, timeout=TEST_TIMEOUT, server_name=PEER_NAME):
    """Return whether a TLS handshake with the host succeeds for the service name."""
    context = ssl.create_default_context()
    try:
        with socket.create_connection((host, port), timeout=timeout) as sock:
            with context.wrap_socket(sock, server_hostname=server_name):
                return True
    except OSError:
        return False


class CdnPool:
    """CDN hosts to test, hosts that passed, and a rotating choice among them.

    While ``enabled`` is false nothing is added and no host is handed out.
    """

    def __init__(self, enabled=True, rng=None):
        self.enabled = enabled
        self._pending = deque()
        self._available = []
        self._index = 0
        self._main = ""
        self._rng = rng or _random.Random()

    @property
    def pending(self):
        """Hosts still waiting to be tested, the one under test first."""
        return tuple(self._pending)

    @property
    def available(self):
        """Hosts that passed the test."""
        return tuple(self._available)

    @property
    def testing(self):
        """The host under test, or None."""
        return self._pending[0] if self._pending else None

    def add(self, host):
        """Queue a host for testing."""
        if self.enabled:
            self._pending.append(host)

    def add_many(self, hosts):
        """Queue several hosts for testing."""
        if self.enabled:
            self._pending.extend(hosts)

    def add_available(self, host):
        """Add a host known to work, unless it is already there."""
        if self.enabled and host not in self._available:
            self._available.append(host)

    def mark_result(self, ok):
        """Record the test result for the host under test; return the next host to test."""
        if self._pending:
            host = self._pending.popleft()
            if ok:
                self._available.append(host)
        return self.testing

    def test_all(self, check=probe):
        """Test every pending host with ``check`` and return the number of working hosts."""
        while self._pending:
            self.mark_result(check(self._pending[0]))
        return len(self._available)

    def clear(self):
        """Drop every host still waiting to be tested."""
        self._pending.clear()

    def clear_available(self):
        """Forget every working host."""
        self._available.clear()
        self._index = 0

    def __bool__(self):
        return bool(self._pending)

    @property
    def main(self):
        """The host chosen for login, or None."""
        if not self.enabled or not self._main:
            return None
        return self._main

    @main.setter
    def main(self, host):
        if self.enabled:
            self._main = host or ""

    def remove_main(self):
        """Forget the host chosen for login."""
        self._main = ""

    def _usable(self):
        return self.enabled and bool(self._available)

    def next(self):
        """Advance to the next working host, wrapping round, and return it (or None)."""
        if not self._usable():
            return None
        self._index = self._index + 1 if self._index < len(self._available) - 1 else 0
        return self._available[self._index]

    def current(self):
        """Return the current working host, or None."""
        if not self._usable():
            return None
        return self._available[self._index]

    def random(self):
        """Return a working host chosen at random, or None."""
        if not self._usable():
            return None
        return self._rng.choice(self._available)