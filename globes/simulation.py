#!/usr/bin/env python3
"""
Simulation state and frame loop for Globes.

Execution model
- Single-threaded and frame-driven. One frame computes all body states, sorts them and
  draws them synchronously; frame N finishes before frame N+1 starts.
- The only state carried between frames is the simulated clock and the scale factor,
  both owned by SimulationState. Per-frame body states are fresh snapshots.
- The frame loop is an explicit task with a cancellation flag, checked before every
  re-request, so no frame is scheduled after teardown.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from .constants import DEFAULT_TIME_STEP, DEFAULT_VIEWING_ANGLE

log = logging.getLogger(__name__)


class FrameScheduler(Protocol):
    """Host primitive that invokes a callback once, on the next display frame."""

    def request_frame(self, callback: Callable[[], None]) -> Any: ...

    def cancel_frame(self, handle: Any) -> None: ...


@dataclass
class SimulationState:
    """
    Simulated clock and scale factor for one mounted view.

    Updated only through advance_clock() and set_scale(); the viewing angle is fixed for
    the lifetime of the view.
    """
    viewing_angle: float = DEFAULT_VIEWING_ANGLE
    time_step: float = DEFAULT_TIME_STEP
    time: float = 0.0
    scale: float = 1.0
    frames: int = 0

    def __post_init__(self):
        if not self.time_step > 0:
            raise ValueError(f"time_step must be positive, got {self.time_step!r}")

    def advance_clock(self) -> None:
        self.time += self.time_step
        self.frames += 1

    def set_scale(self, scale: float) -> None:
        # 0 when the container collapses to zero width or height
        if not scale >= 0:
            raise ValueError(f"scale must be non-negative, got {scale!r}")
        self.scale = float(scale)


class FrameLoop:
    """
    Continuous animation task: run step(), then request the next frame, until cancelled.
    """

    def __init__(self, scheduler: FrameScheduler, step: Callable[[], None]):
        self.scheduler = scheduler
        self.step = step
        self.cancelled = False
        self._handle: Optional[Any] = None

    @property
    def running(self) -> bool:
        return not self.cancelled and self._handle is not None

    def start(self) -> None:
        if self.cancelled:
            raise RuntimeError("Frame loop was cancelled and cannot be restarted")
        if self._handle is None:
            self._handle = self.scheduler.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._handle = None
        if self.cancelled:
            return
        self.step()
        if not self.cancelled:
            self._handle = self.scheduler.request_frame(self._on_frame)

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None
        log.debug("Frame loop cancelled")
