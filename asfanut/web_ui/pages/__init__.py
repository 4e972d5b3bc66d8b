"""Web UI ページモジュール。"""
from asfanut.web_ui.pages.dashboard import render_dashboard
from asfanut.web_ui.pages.details import render_details
from asfanut.web_ui.pages.legal import render_legal
from asfanut.web_ui.pages.login import render_login
from asfanut.web_ui.pages.product import render_product
from asfanut.web_ui.pages.scan import render_scan
from asfanut.web_ui.pages.setup import render_setup
from asfanut.web_ui.pages.storefront import render_storefront

__all__ = [
    "render_setup",
    "render_login",
    "render_dashboard",
    "render_scan",
    "render_details",
    "render_legal",
    "render_storefront",
    "render_product",
]
