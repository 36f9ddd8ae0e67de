"""Coalescing of redraw requests into at most one render pass per frame."""

import asyncio
import logging
from typing import Callable, Iterable, Protocol

from service.climate.models import Unit

logger = logging.getLogger("scheduler")

# ~60 frames per second.
DEFAULT_FRAME_INTERVAL = 1 / 60


class FrameClock(Protocol):
    def request_frame(self, callback: Callable[[], None]) -> None:
        """Arranges for callback to be called once, at the next frame."""
        ...


class AsyncioFrameClock:
    """Fires frame callbacks on the running asyncio event loop."""

    def __init__(
        self,
        interval: float = DEFAULT_FRAME_INTERVAL,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self.interval = interval
        self._loop = loop

    def request_frame(self, callback: Callable[[], None]) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(self.interval, callback)


class ManualFrameClock:
    """Frame clock for headless use: frames fire when tick() is called.

    Frames may render outside of any event loop. Year loads still need one,
    so pair this clock with a DataStore that was given its loop.
    """

    def __init__(self):
        self._callbacks: list[Callable[[], None]] = []

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def request_frame(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def tick(self) -> int:
        """Fires all callbacks requested so far. Returns their number."""
        callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb()
        return len(callbacks)


class RedrawScheduler:

    def __init__(
        self,
        rebuild_unit: Callable[[Unit], None],
        rebuild_combined: Callable[[], None],
        combined_units: Callable[[], Iterable[Unit]],
        clock: FrameClock,
        after_frame: Callable[[], None] | None = None,
    ):
        """Creates a new RedrawScheduler.

        Args:
            rebuild_unit: re-aggregates and re-renders one unit's chart.
            rebuild_combined: re-aggregates and re-renders the combined chart.
            combined_units: returns the units currently shown in the combined chart.
            clock: arms the frame callbacks.
            after_frame: optional hook called after every completed frame.
        """
        self._rebuild_unit = rebuild_unit
        self._rebuild_combined = rebuild_combined
        self._combined_units = combined_units
        self._clock = clock
        self.after_frame = after_frame

        # dict as an insertion-ordered set
        self._pending: dict[Unit, None] = {}
        self._force_combined = False
        # Identifies the armed frame; None if no frame is armed.
        self._armed_frame: int | None = None
        self._frame_seq = 0
        self.frames_rendered = 0

    @property
    def armed(self) -> bool:
        return self._armed_frame is not None

    def pending_units(self) -> list[Unit]:
        return list(self._pending)

    def request(self, units: Iterable[Unit] = (), force_combined: bool = False):
        """Marks units (and optionally the combined chart) as needing a redraw.

        The first request after an idle period arms exactly one frame;
        later requests only add to the pending set.
        """
        for u in units:
            self._pending[u] = None
        self._force_combined = self._force_combined or force_combined

        if self._armed_frame is None:
            self._frame_seq += 1
            frame = self._frame_seq
            self._armed_frame = frame
            self._clock.request_frame(lambda: self._on_frame(frame))

    def _on_frame(self, frame: int):
        # Stale callbacks of frames that were already flushed are ignored.
        if self._armed_frame != frame:
            return
        self._run_frame()

    def flush(self) -> bool:
        """Runs the armed frame now, if any. Returns True if a frame ran."""
        if self._armed_frame is None:
            return False
        self._run_frame()
        return True

    def _run_frame(self):
        units = list(self._pending)
        force_combined = self._force_combined
        self._pending = {}
        self._force_combined = False
        self._armed_frame = None

        logger.debug(
            "Frame %d: units=%s force_combined=%s",
            self.frames_rendered + 1,
            units,
            force_combined,
        )
        for unit in units:
            self._rebuild_unit(unit)
        if force_combined or set(self._combined_units()) & set(units):
            self._rebuild_combined()
        self.frames_rendered += 1
        if self.after_frame is not None:
            self.after_frame()
