"""Alert rendering and delivery."""

from .alerts import AlertDispatcher, escape_html, format_money, render_alert

__all__ = [
    "AlertDispatcher",
    "escape_html",
    "format_money",
    "render_alert",
]
