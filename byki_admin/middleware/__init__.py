"""HTTP middleware, applied in create_app()."""

from byki_admin.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
