"""Server-rendered pages (landing)."""

from byki_admin.pages.root import render_root_page

__all__ = ["render_root_page"]
