#!/usr/bin/env python3
"""
Read-only Dear PyGui inspector for a running Globes view.

The panel is rendered from the same frame loop as the view (render_dearpygui_frame is
called once per frame), so no extra thread or lock is involved. It shows simulated time,
the current scale factor and the back-to-front draw order. It has no controls.
"""
import logging
from typing import Callable, List, Optional, Sequence, Tuple

import dearpygui.dearpygui as dpg

from .catalog import Catalog
from .constants import DAY
from .data_models import BodyState
from .simulation import SimulationState

log = logging.getLogger(__name__)


def draw_order_names(catalog: Catalog, order: Sequence[BodyState]) -> List[str]:
    """Body names in draw order (farthest first)."""
    return [catalog[s.index].name for s in order]


def format_readouts(sim: SimulationState) -> Tuple[str, str, str]:
    return (
        f"Simulated: {sim.time / DAY:,.1f} days",
        f"Scale: {sim.scale:.6g} px/unit",
        f"Frame: {sim.frames}",
    )


class Inspector:
    """
    Dear PyGui window mirroring the simulation state.

    on_close is called once, when the user closes the inspector viewport.
    """

    def __init__(self, catalog: Catalog, title: str = "Globes - Inspector",
                 on_close: Optional[Callable[[], None]] = None):
        self.catalog = catalog
        self.on_close = on_close
        self.closed = False

        self.time_id = None
        self.scale_id = None
        self.frame_id = None
        self.order_id = None

        self._build_ui(title)

    def _build_ui(self, title: str) -> None:
        dpg.create_context()
        dpg.create_viewport(title=title, width=320, height=420)

        with dpg.window(label="Inspector", width=300, height=400, pos=(10, 10), tag="inspector_window"):
            self.time_id = dpg.add_text("Simulated: 0.0 days")
            self.scale_id = dpg.add_text("Scale: -")
            self.frame_id = dpg.add_text("Frame: 0")
            dpg.add_separator()
            dpg.add_text("Draw order (back to front)")
            self.order_id = dpg.add_listbox([b.name for b in self.catalog], num_items=len(self.catalog),
                                            width=260)

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("inspector_window", True)

    def __call__(self, sim: SimulationState, states: Sequence[BodyState],
                 order: Sequence[BodyState]) -> None:
        """Frame observer: refresh readouts and render one inspector frame."""
        if self.closed:
            return
        if not dpg.is_dearpygui_running():
            self.close()
            return
        time_text, scale_text, frame_text = format_readouts(sim)
        dpg.set_value(self.time_id, time_text)
        dpg.set_value(self.scale_id, scale_text)
        dpg.set_value(self.frame_id, frame_text)
        dpg.configure_item(self.order_id, items=draw_order_names(self.catalog, order))
        dpg.render_dearpygui_frame()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        dpg.destroy_context()
        log.debug("Inspector closed")
        if self.on_close is not None:
            self.on_close()
