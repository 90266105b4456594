"""The game server loop."""

from __future__ import annotations

import time
from collections.abc import Callable

from sandboxington.bytebuffer import ByteBuffer
from sandboxington.host import PeerId, ServerHost
from sandboxington.packets import LOGGER, UPS, ClientPacket
from sandboxington.queues import MessageQueue
from sandboxington.world import World, WorldData

EXIT_CODES = frozenset({"exit", "quit", "e", "q"})
"""Console commands that stop the server."""

MAX_SKIP = 5
"""Most world ticks run in one poll when the server falls behind."""

TICK = 1.0 / UPS
"""Seconds between world ticks."""

_IDLE_SLEEP = 0.002


class Server:
    """Runs a world at a fixed tick rate and serves it through a host."""

    def __init__(
        self,
        host: ServerHost,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.host = host
        self.world = World(seed=seed)
        self.commands: MessageQueue[str] = MessageQueue()
        self.running = True
        self._clock = clock
        self._next_tick: float | None = None

    def init_world(self, data: WorldData) -> None:
        """Attach static data to the world and generate its chunks."""
        self.world.data = data
        self.world.init()

    def poll(self) -> None:
        """Handle network events, run due world ticks and drain console commands."""
        self.host.process(self.on_connect, self.on_disconnect, self.receive)

        now = self._clock()
        if self._next_tick is None:
            self._next_tick = now
        loops = 0
        while now > self._next_tick and loops < MAX_SKIP:
            self.world.update(self.host)
            self._next_tick += TICK
            loops += 1

        for command in self.commands:
            if command in EXIT_CODES:
                self.running = False

    def run(self) -> None:
        """Poll until an exit command arrives, then close the host."""
        while self.running:
            self.poll()
            if self.running:
                self._idle()
        LOGGER.debug("closing server")
        self.host.close()

    def _idle(self) -> None:
        if self._next_tick is None:
            return
        remaining = self._next_tick - self._clock()
        if remaining > 0:
            time.sleep(min(remaining, _IDLE_SLEEP))

    def on_connect(self, peer: PeerId) -> None:
        """A peer connected; it joins the world only once it authenticates."""

    def on_disconnect(self, peer: PeerId) -> None:
        self.world.disconnect(self.host, peer)

    def receive(self, peer: PeerId, buf: ByteBuffer) -> None:
        """Dispatch a packet from ``peer`` by its header byte."""
        value = buf.get_byte()
        try:
            packet = ClientPacket(value)
        except ValueError:
            LOGGER.debug("Ignoring unknown packet %d from peer %d", value, peer)
            return
        if packet is ClientPacket.AUTHENTICATE:
            self.world.connect(self.host, peer)
        else:
            self.world.receive(self.host, peer, packet, buf)