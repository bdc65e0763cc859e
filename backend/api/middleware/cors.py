"""
Path-scoped CORS middleware.

The mail function is called from any origin, like the hosted edge
function it stands in for. Everything else keeps the configured
origin list.
"""

from fastapi.middleware.cors import CORSMiddleware

# Headers the mail function accepts on cross-origin calls
OPEN_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


class ScopedCORSMiddleware:
    """
    Applies an open CORS policy under `open_paths` and the configured
    policy everywhere else.

    Remaining keyword arguments go to the configured CORSMiddleware.
    """

    def __init__(self, app, open_paths: tuple[str, ...] = (), **options):
        self.open_paths = tuple(open_paths)
        self.configured = CORSMiddleware(app, **options)
        self.open = CORSMiddleware(
            app,
            allow_origins=["*"],
            allow_methods=["POST", "OPTIONS"],
            allow_headers=OPEN_ALLOW_HEADERS,
        )

    def _is_open(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(prefix + "/") for prefix in self.open_paths
        )

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and self._is_open(scope["path"]):
            await self.open(scope, receive, send)
        else:
            await self.configured(scope, receive, send)
