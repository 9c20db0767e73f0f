"""Render session holding the latest shader text and latest error for interactive front ends."""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

from dot2shader_codec import Dot2ShaderError, PixelArt, decode
from dot2shader_renderer import DEFAULT_DISPLAY_CONFIG, DisplayConfig, render

from .admission import MAX_PALETTE_SIZE, check_file_size, check_palette_size
from .logging_setup import get_logger


class SessionState(str, Enum):
    EMPTY = "Empty"
    DECODING = "Decoding"
    RENDERING = "Rendering"
    READY = "Ready"
    ERROR = "Error"


@dataclass
class SessionStatus:
    state: SessionState = SessionState.EMPTY
    width: int = 0
    height: int = 0
    palette_size: int = 0
    renders_completed: int = 0
    last_error: str | None = None


class RenderSession:
    def __init__(
        self,
        config: DisplayConfig | None = None,
        max_file_bytes: int | None = None,
        palette_limit: int | None = MAX_PALETTE_SIZE,
    ) -> None:
        self.max_file_bytes = max_file_bytes
        self.palette_limit = palette_limit

        self._config = config or DEFAULT_DISPLAY_CONFIG
        self._pixel_art: PixelArt | None = None
        self._text = ""
        self._status = SessionStatus()
        self._lock = threading.RLock()
        self._workers: list[threading.Thread] = []
        self._events: list[dict[str, Any]] = []
        self._logger = get_logger().getChild("core")

    @property
    def config(self) -> DisplayConfig:
        with self._lock:
            return self._config

    @property
    def pixel_art(self) -> PixelArt | None:
        with self._lock:
            return self._pixel_art

    @property
    def latest_text(self) -> str:
        with self._lock:
            return self._text

    @property
    def latest_error(self) -> str | None:
        with self._lock:
            return self._status.last_error

    @property
    def status(self) -> SessionStatus:
        with self._lock:
            return replace(self._status)

    def recent_events(self, limit: int = 200) -> list[dict[str, Any]]:
        with self._lock:
            return self._events[-limit:]

    def _log_event(self, event: str, **fields: Any) -> None:
        row = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "state": self._status.state.value,
        }
        row.update(fields)
        self._events.append(row)
        if len(self._events) > 1000:
            self._events = self._events[-1000:]
        self._logger.info(event, extra={"event": event})

    def load_image(self, raw: bytes, background: bool = True) -> threading.Thread | None:
        with self._lock:
            self._status.state = SessionState.DECODING
            self._status.last_error = None
            self._log_event("load_start", bytes=len(raw))
        return self._dispatch(self._load, raw, background=background)

    def set_config(self, config: DisplayConfig, background: bool = True) -> threading.Thread | None:
        """Re-render when the configuration actually changed and an image is loaded."""
        with self._lock:
            if config == self._config:
                return None
            self._config = config
            self._status.last_error = None
            self._log_event("config_changed")
            if self._pixel_art is None:
                return None
        return self._dispatch(self._render, background=background)

    def wait(self, timeout: float | None = None) -> bool:
        with self._lock:
            workers = list(self._workers)
        for worker in workers:
            worker.join(timeout)
        return not any(worker.is_alive() for worker in workers)

    def _dispatch(self, target: Callable[..., None], *args: Any, background: bool) -> threading.Thread | None:
        if not background:
            target(*args)
            return None
        worker = threading.Thread(target=target, args=args, name="dot2shader-render", daemon=True)
        with self._lock:
            self._workers = [w for w in self._workers if w.is_alive()]
            self._workers.append(worker)
        worker.start()
        return worker

    def _load(self, raw: bytes) -> None:
        try:
            check_file_size(raw, self.max_file_bytes)
            art = decode(raw)
            check_palette_size(art, self.palette_limit)
        except Dot2ShaderError as exc:
            with self._lock:
                self._status.state = SessionState.ERROR
                self._status.last_error = str(exc)
                self._log_event("load_error", error=str(exc))
            return

        with self._lock:
            self._pixel_art = art
            self._status.width = art.width
            self._status.height = art.height
            self._status.palette_size = art.palette_size
            self._log_event("load_ok", width=art.width, height=art.height, palette_size=art.palette_size)
        self._render()

    def _render(self) -> None:
        with self._lock:
            art = self._pixel_art
            config = self._config
            if art is None:
                return
            self._status.state = SessionState.RENDERING

        text = render(art, config)

        with self._lock:
            self._text = text
            self._status.renders_completed += 1
            if self._status.last_error is None:
                self._status.state = SessionState.READY
            self._log_event("render_ok", chars=len(text))
