"""
FastAPI server for the prayer times API. Run with run_api_server(app).
Per-plugin routes are mounted from namaz_dashboard.plugins.<package>.api
(get_router(dashboard_app)) both at the root and under /api/.
Docs when enabled: http://<host>:<port>/docs
"""
import importlib
import logging
import pkgutil
from typing import Any, Dict

from fastapi import FastAPI

logger = logging.getLogger(__name__)


def create_app(dashboard_app: Any) -> FastAPI:
    """Create FastAPI app with routes that use the given PrayerTimesApp instance."""
    app = FastAPI(title="Namaz Vakitleri API", description="Prayer times for Turkish cities from several providers")

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        """Liveness check; does not contact any provider."""
        return {"status": "ok"}

    # Mount per-plugin API routers from namaz_dashboard.plugins.<name>.api (get_router(dashboard_app))
    plugins_pkg = importlib.import_module("namaz_dashboard.plugins")
    for _mod, name, is_pkg in pkgutil.iter_modules(plugins_pkg.__path__):
        if not is_pkg:
            continue
        try:
            api_module = importlib.import_module(f"namaz_dashboard.plugins.{name}.api")
        except ImportError as e:
            logger.debug(f"Plugin {name} has no API module: {e}")
            continue
        if not hasattr(api_module, "get_router") or not callable(api_module.get_router):
            continue
        router = api_module.get_router(dashboard_app)
        if router is not None:
            app.include_router(router)
            app.include_router(router, prefix="/api")
            logger.info(f"Mounted API router for plugin {name}")

    return app


def run_api_server(dashboard_app: Any) -> None:
    """
    Serve the API with uvicorn until interrupted.
    Reads api.host (default 127.0.0.1) and api.port (default 8765) from config.
    """
    import uvicorn

    api_config = dashboard_app.config.data.get("api") or {}
    host = api_config.get("host", "127.0.0.1")
    port = int(api_config.get("port", 8765))
    fastapi_app = create_app(dashboard_app)

    logger.info(f"API server listening at http://{host}:{port} (docs at /docs)")
    uvicorn.run(fastapi_app, host=host, port=port, log_config=None)
