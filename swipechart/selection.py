from __future__ import annotations

from dataclasses import dataclass, field
import logging


LOGGER = logging.getLogger(__name__)

DEFAULT_DESELECT_DELAY_S = 10.0


@dataclass
class DeselectTimer:
    """Single-shot, cancelable deadline driven by the caller's clock.

    Nothing runs in the background: the owner calls ``poll(now)`` on its
    event loop, or hands ``token`` to a host scheduler and calls
    ``expire(token)`` when that fires. Arming always cancels the pending token
    first, so at most one is live.
    """

    delay: float = DEFAULT_DESELECT_DELAY_S
    _deadline: float | None = None
    _token: int = 0

    def __post_init__(self) -> None:
        if self.delay <= 0:
            raise ValueError("delay must be > 0")

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    @property
    def token(self) -> int | None:
        return self._token if self._deadline is not None else None

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def arm(self, now: float) -> int:
        self.cancel()
        self._token += 1
        self._deadline = float(now) + self.delay
        return self._token

    def cancel(self) -> None:
        self._deadline = None

    def poll(self, now: float) -> bool:
        if self._deadline is None or now < self._deadline:
            return False
        self._deadline = None
        return True

    def expire(self, token: int) -> bool:
        # Stale tokens from a superseded arm() are ignored.
        if self._deadline is None or token != self._token:
            return False
        self._deadline = None
        return True


@dataclass(frozen=True)
class Tooltip:
    index: int
    anchor: tuple[float, float]
    value_text: str
    date_text: str


@dataclass
class SelectionState:
    timer: DeselectTimer = field(default_factory=DeselectTimer)
    tooltip: Tooltip | None = None

    @property
    def selected(self) -> int | None:
        return None if self.tooltip is None else self.tooltip.index

    def select(self, tooltip: Tooltip, now: float) -> int:
        self.tooltip = tooltip
        LOGGER.debug("selected point %d", tooltip.index)
        return self.timer.arm(now)

    def clear(self) -> bool:
        self.timer.cancel()
        if self.tooltip is None:
            return False
        LOGGER.debug("cleared selection of point %d", self.tooltip.index)
        self.tooltip = None
        return True

    def poll(self, now: float) -> bool:
        if self.timer.poll(now):
            return self.clear()
        return False

    def expire(self, token: int) -> bool:
        if self.timer.expire(token):
            return self.clear()
        return False
