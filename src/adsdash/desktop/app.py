"""Main Flet application entry point."""

from __future__ import annotations

import time
from typing import Optional

import flet as ft

from ..config import BaseConfig
from ..devtools import dev_log
from ..logging_config import setup_logging
from .context import create_app_context
from .navigation import Router
from .views.campaign_reports import build_campaign_reports_view
from .views.client_campaign_reports import build_client_campaign_reports_view
from .views.client_dashboard import build_client_dashboard_view
from .views.client_topups import build_client_topups_view
from .views.home import build_home_view
from .views.org_clients import build_org_clients_view
from .views.topups import build_topups_view

ROUTE_BUILDERS = {
    "/": build_home_view,
    "/admin/org-clients": build_org_clients_view,
    "/admin/campaign-reports": build_campaign_reports_view,
    "/admin/topups": build_topups_view,
    "/client/:code": build_client_dashboard_view,
    "/client/:code/campaign-reports": build_client_campaign_reports_view,
    "/client/:code/topups": build_client_topups_view,
}


def build_app(config: Optional[BaseConfig] = None):
    """Return a Flet ``target`` bound to ``config`` (loaded from env when None)."""

    def main(page: ft.Page) -> None:
        ctx = create_app_context(config)
        logger = setup_logging(ctx.config)
        logger.info(
            "Ads dashboard starting",
            extra={"backend_configured": ctx.config.has_backend, "dev_mode": ctx.dev_mode},
        )

        ctx.page = page
        page.title = f"{ctx.config.APP_NAME} (DEV)" if ctx.dev_mode else ctx.config.APP_NAME
        if ctx.dev_mode:
            dev_log(ctx.config, "Dev mode enabled", context={"data_dir": ctx.config.DATA_DIR})
        if not ctx.config.has_backend:
            logger.warning("ADSDASH_BACKEND_URL is not set; every request will fail")
        page.theme_mode = ctx.theme_mode
        page.padding = 0
        page.window.width = 1280
        page.window.height = 800
        page.window.min_width = 1024
        page.window.min_height = 600

        def on_page_close(_):
            logger.info("Application closing, releasing HTTP client")
            page.run_task(ctx.api.aclose)

        page.on_close = on_page_close

        router = Router(page, ctx)
        for route, builder in ROUTE_BUILDERS.items():
            router.register(route, builder)

        page.on_route_change = router.route_change
        page.on_view_pop = router.view_pop

        # Throttle repeated identical Flet error events
        last_message: Optional[str] = None
        last_ts = 0.0
        suppressed = 0

        def _on_error(e: ft.ControlEvent):  # pragma: no cover (UI callback)
            nonlocal last_message, last_ts, suppressed
            msg = getattr(e, "data", None) or "<no-data>"
            now = time.time()
            if last_message == msg and (now - last_ts) < 0.5:
                suppressed += 1
                last_ts = now
                return
            if suppressed:
                logger.warning(
                    "Suppression summary",
                    extra={"event": "error_suppression_summary", "error_message": last_message, "suppressed": suppressed},
                )
            last_message, last_ts, suppressed = msg, now, 0
            logger.error("Flet page error", extra={"event": "error", "data": msg})
            page.open(ft.SnackBar(content=ft.Text(f"UI error: {msg}")))

        page.on_error = _on_error

        page.go(page.route or "/")

    return main


main = build_app()
