"""Navigation and routing for the Flet app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Tuple
from urllib.parse import unquote

import flet as ft

if TYPE_CHECKING:
    from .context import AppContext

from ..devtools import dev_log
from ..logging_config import get_logger
from .navigation_helpers import HOME_ROUTE

logger = get_logger(__name__)

# View builder type; the dict holds route parameters such as ``code``
ViewBuilder = Callable[["AppContext", ft.Page, Dict[str, str]], ft.View]


class Router:
    """Maps literal and ``:param`` routes to view builders."""

    def __init__(self, page: ft.Page, context: AppContext, *, fallback: str = HOME_ROUTE):
        self.page = page
        self.context = context
        self.fallback = fallback
        self.routes: Dict[str, ViewBuilder] = {}

    def register(self, route: str, builder: ViewBuilder) -> None:
        """Register a route pattern with its view builder."""
        logger.debug("Registering route", extra={"route": route})
        self.routes[route] = builder

    def resolve(self, route: str) -> Tuple[str, ViewBuilder, Dict[str, str]]:
        """Return ``(pattern, builder, params)``; unknown routes resolve to the fallback."""

        path = (route or HOME_ROUTE).split("?", 1)[0] or HOME_ROUTE
        if path in self.routes:
            return path, self.routes[path], {}
        for pattern, builder in self.routes.items():
            if ":" not in pattern:
                continue
            template = ft.TemplateRoute(path)
            if template.match(pattern):
                params = {
                    key: unquote(value)
                    for key, value in vars(template).items()
                    if key != "route" and isinstance(value, str)
                }
                return pattern, builder, params
        logger.warning("Unknown route, showing fallback", extra={"route": path, "fallback": self.fallback})
        return self.fallback, self.routes[self.fallback], {}

    def route_change(self, e: ft.RouteChangeEvent) -> None:
        """Handle route change events."""
        self.show(e.route or HOME_ROUTE)

    def show(self, route: str) -> None:
        pattern, builder, params = self.resolve(route)
        logger.info("Route change", extra={"route": route, "pattern": pattern, "params": params})
        try:
            view = builder(self.context, self.page, params)
        except Exception as ex:
            logger.error("Failed to build view", extra={"route": route}, exc_info=True)
            dev_log(self.context.config, "Route load failed", exc=ex, context={"route": route})
            self.show_error(f"Error loading view: {ex}")
            return
        self.page.views.clear()
        self.page.views.append(view)
        self.page.update()

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        """Handle back button navigation."""
        if len(self.page.views) > 1:
            self.page.views.pop()
        top_view = self.page.views[-1]
        self.page.go(top_view.route)

    def show_error(self, message: str) -> None:
        """Display an error dialog."""
        dialog = ft.AlertDialog(
            title=ft.Text("Error"),
            content=ft.Text(message),
            actions=[ft.TextButton("OK", on_click=lambda _: self.page.close(dialog))],
        )
        self.page.open(dialog)
