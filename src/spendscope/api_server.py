"""FastAPI server for the SpendScope upload page and analysis fragments."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from spendscope.analyzer import analyze_cost_csv
from spendscope.config import AppSettings, load_settings
from spendscope.contracts import AnalysisResult, ChartSpec
from spendscope.errors import ConfigurationError
from spendscope.llm.base import StructuredBackend
from spendscope.llm.router import build_backend
from spendscope.orchestrator import AnalysisSession
from spendscope.preferences import CookiePreferenceStore, initial_tier, select_tier
from spendscope.render import (
    render_chart_payloads,
    render_configuration_error_html,
    render_page_shell,
    render_tier_buttons,
    render_upload_view,
)

LOGGER = logging.getLogger(__name__)


class FragmentViewPort:
    """Collects one request's view side effects into an HTML response body."""

    def __init__(self) -> None:
        self.fragment: str = ""
        self.charts: dict[str, ChartSpec] = {}
        self.document: Optional[str] = None
        self.notice: Optional[str] = None
        self.loader_visible = False
        self.upload_hidden = False

    def show_loader(self) -> None:
        self.loader_visible = True

    def hide_loader(self) -> None:
        self.loader_visible = False

    def hide_upload_form(self) -> None:
        self.upload_hidden = True

    def swap(self, markup: str) -> None:
        self.fragment = markup
        self.charts = {}

    def replace_document(self, markup: str) -> None:
        self.document = markup

    def draw(self, mount_id: str, spec: ChartSpec) -> None:
        self.charts[mount_id] = spec

    def prompt(self, message: str) -> None:
        self.notice = message

    def body(self) -> str:
        return self.fragment + render_chart_payloads(self.charts)


def create_app(
    settings: Optional[AppSettings] = None,
    backend_factory: Optional[Callable[[], StructuredBackend]] = None,
) -> FastAPI:
    """Create the FastAPI app; ``backend_factory`` overrides provider construction."""
    settings = settings or load_settings()

    def _default_factory() -> StructuredBackend:
        return build_backend(settings)

    make_backend = backend_factory or _default_factory

    app = FastAPI(title="SpendScope API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins) or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    LOGGER.info("SpendScope app created provider=%s", settings.provider)

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    def index() -> HTMLResponse:
        try:
            make_backend()
        except ConfigurationError as exc:
            LOGGER.error("Analysis service is not configured: %s", exc)
            return HTMLResponse(render_page_shell(render_configuration_error_html(str(exc))))
        return HTMLResponse(render_page_shell())

    @app.get("/dashboard.html", response_class=HTMLResponse)
    def dashboard(request: Request) -> HTMLResponse:
        store = CookiePreferenceStore(request.cookies)
        response = HTMLResponse(render_upload_view(initial_tier(store)))
        store.apply(response)
        return response

    @app.post("/analyze", response_class=HTMLResponse)
    async def analyze(request: Request, file: Optional[UploadFile] = File(None)) -> HTMLResponse:
        store = CookiePreferenceStore(request.cookies)
        view = FragmentViewPort()

        def _run(csv_text: str) -> AnalysisResult:
            return analyze_cost_csv(csv_text, backend=make_backend())

        session = AnalysisSession(_run, view, preferences=store)
        await session.submit(file)

        if view.document is not None:
            return HTMLResponse(
                view.document,
                headers={"HX-Retarget": "body", "HX-Reswap": "innerHTML"},
            )
        if view.notice is not None:
            response = HTMLResponse(render_upload_view(initial_tier(store), notice=view.notice))
            store.apply(response)
            return response
        return HTMLResponse(view.body())

    @app.post("/tier/{tier}", response_class=HTMLResponse)
    def choose_tier(tier: str, request: Request) -> HTMLResponse:
        store = CookiePreferenceStore(request.cookies)
        try:
            selected = select_tier(store, tier)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        response = HTMLResponse(render_tier_buttons(selected))
        store.apply(response)
        return response

    return app
