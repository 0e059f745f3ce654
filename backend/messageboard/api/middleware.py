"""HTTP Middleware - CORS plus security and no-cache headers on every response.

Invariants:
    - X-Frame-Options and Referrer-Policy values come from settings
    - DNS prefetching always disabled
    - Responses are never cacheable (Cache-Control, Pragma, Expires)
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from messageboard.config import Settings

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Attach CORS and header middleware to the app."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    security_headers = {
        "X-Frame-Options": settings.frame_options,
        "X-DNS-Prefetch-Control": "off",
        "Referrer-Policy": settings.referrer_policy,
    }

    @app.middleware("http")
    async def add_response_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in {**security_headers, **NO_CACHE_HEADERS}.items():
            response.headers[name] = value
        return response
