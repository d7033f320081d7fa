"""Upload -> analysis -> dashboard state machine.

``AnalysisSession`` owns the single authoritative state of one analysis flow
and performs side effects only on transitions, through a ``ViewPort``
supplied by the caller (the HTTP layer, or a recording fake in tests).
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from spendscope.charts import project_charts
from spendscope.config import (
    COST_CHART_ID,
    EMPTY_SELECTION_MESSAGE,
    SERVICE_CHART_ID,
    TIER_BUTTONS_ID,
)
from spendscope.contracts import AnalysisResult, ChartSpec
from spendscope.errors import ConfigurationError
from spendscope.preferences import InMemoryPreferenceStore, PreferenceStore, initial_tier
from spendscope.render import (
    render_analysis_html,
    render_configuration_error_html,
    render_error_html,
    render_upload_view,
)

LOGGER = logging.getLogger(__name__)

AnalyzeFn = Callable[[str], AnalysisResult]


class SessionState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


class UploadedFile(Protocol):
    filename: Optional[str]

    async def read(self) -> bytes: ...


class ViewPort(Protocol):
    """Side effects the session triggers on the displayed document."""

    def show_loader(self) -> None: ...

    def hide_loader(self) -> None: ...

    def hide_upload_form(self) -> None: ...

    def swap(self, markup: str) -> None: ...

    def replace_document(self, markup: str) -> None: ...

    def draw(self, mount_id: str, spec: ChartSpec) -> None: ...

    def prompt(self, message: str) -> None: ...


class SwapHooks:
    """Run an initializer after a fragment swap when its mount point is present."""

    def __init__(self) -> None:
        self._hooks: list[tuple[str, Callable[[], None]]] = []

    def register(self, mount_id: str, initializer: Callable[[], None]) -> None:
        self._hooks.append((mount_id, initializer))

    def fire(self, markup: str) -> list[str]:
        """Run initializers whose mount id appears in ``markup``; return the ids run."""
        ran: list[str] = []
        for mount_id, initializer in self._hooks:
            if f'id="{mount_id}"' in markup:
                initializer()
                ran.append(mount_id)
        return ran


def decode_upload(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


class AnalysisSession:
    """One user's upload/analysis flow: ``IDLE -> LOADING -> SUCCESS | FAILED``."""

    def __init__(
        self,
        analyze: AnalyzeFn,
        view: ViewPort,
        hooks: Optional[SwapHooks] = None,
        preferences: Optional[PreferenceStore] = None,
    ) -> None:
        self._analyze = analyze
        self._view = view
        self._hooks = SwapHooks()
        self._caller_hooks = hooks
        self._preferences = preferences if preferences is not None else InMemoryPreferenceStore()
        self._state = SessionState.IDLE
        self._result: Optional[AnalysisResult] = None
        self._charts: dict[str, ChartSpec] = {}
        self.last_error: Optional[BaseException] = None
        self.tier: Optional[str] = None
        self._register_default_hooks()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self._result

    def _register_default_hooks(self) -> None:
        for mount_id in (COST_CHART_ID, SERVICE_CHART_ID):
            self._hooks.register(mount_id, self._chart_initializer(mount_id))
        self._hooks.register(TIER_BUTTONS_ID, self._init_tier)

    def _init_tier(self) -> None:
        self.tier = initial_tier(self._preferences)

    def _chart_initializer(self, mount_id: str) -> Callable[[], None]:
        def _draw() -> None:
            spec = self._charts.get(mount_id)
            if spec is not None:
                self._view.draw(mount_id, spec)

        return _draw

    def _transition(self, new_state: SessionState) -> None:
        LOGGER.debug("Session state %s -> %s", self._state.value, new_state.value)
        self._state = new_state

    def _swap(self, markup: str) -> None:
        self._view.swap(markup)
        self._hooks.fire(markup)
        if self._caller_hooks is not None:
            self._caller_hooks.fire(markup)

    async def submit(self, upload: Optional[UploadedFile]) -> SessionState:
        """Handle one file submission and return the resulting state."""
        if self._state is SessionState.LOADING:
            raise RuntimeError("An analysis is already in progress.")
        if upload is None or not getattr(upload, "filename", None):
            self._view.prompt(EMPTY_SELECTION_MESSAGE)
            return self._state

        self._view.hide_upload_form()
        self._view.show_loader()
        self._transition(SessionState.LOADING)
        try:
            csv_text = decode_upload(await upload.read())
            result = await asyncio.to_thread(self._analyze, csv_text)
            self._result = result
            self._charts = project_charts(result)
            self._swap(render_analysis_html(result))
            self._transition(SessionState.SUCCESS)
        except ConfigurationError as exc:
            LOGGER.error("Analysis service is not configured: %s", exc)
            self.last_error = exc
            self._transition(SessionState.FAILED)
            self._view.replace_document(render_configuration_error_html(str(exc)))
        except Exception as exc:  # noqa: BLE001 - every failure becomes the error fragment
            LOGGER.exception("Analysis failed [%s]", type(exc).__name__)
            self.last_error = exc
            self._result = None
            self._charts = {}
            self._transition(SessionState.FAILED)
            self._view.swap(render_error_html(str(exc) or type(exc).__name__))
        finally:
            self._view.hide_loader()
        return self._state

    def restart(self) -> SessionState:
        """Return to the upload view ("analyze another")."""
        if self._state is SessionState.LOADING:
            raise RuntimeError("Cannot restart while an analysis is in progress.")
        self._result = None
        self._charts = {}
        self.last_error = None
        self._transition(SessionState.IDLE)
        self._swap(render_upload_view(initial_tier(self._preferences)))
        return self._state
