import asyncio, logging, time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from .config import settings
from .sites import SITES
from . import checker
from .dashboard import Dashboard
from .presenter import build_view
from .ui import render_board, render_page

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app_start_time = time.time()
dashboard = Dashboard(SITES)

NO_STORE = {"Cache-Control": "no-store"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the refresh loop (first check runs immediately) and stop it on shutdown."""
    loop_task = asyncio.create_task(dashboard.run_periodic(settings.REFRESH_INTERVAL_S))
    logger.info(f"Monitoring {sum(len(v) for v in SITES.values())} sites, "
                f"refresh every {settings.REFRESH_INTERVAL_S:g}s")
    yield
    loop_task.cancel()
    await asyncio.gather(loop_task, return_exceptions=True)
    await dashboard.aclose()


app = FastAPI(title="SiteWatch", lifespan=lifespan)


@app.get("/", response_class=HTMLResponse)
def index():
    return HTMLResponse(render_page(build_view(dashboard.snapshot, dashboard.checking)), headers=NO_STORE)


@app.get("/board", response_class=HTMLResponse)
def board():
    """Board fragment from the held snapshot; never probes."""
    return HTMLResponse(render_board(build_view(dashboard.snapshot, dashboard.checking)), headers=NO_STORE)


@app.post("/refresh", response_class=HTMLResponse)
async def refresh():
    await dashboard.refresh()
    return HTMLResponse(render_board(build_view(dashboard.snapshot, dashboard.checking)), headers=NO_STORE)


@app.get("/health", response_class=JSONResponse)
def health():
    return JSONResponse({
        "ok": True,
        "uptime_s": int(time.time() - app_start_time),
        "sites_count": sum(len(v) for v in SITES.values()),
    })


@app.api_route("/api/check-status",
               methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
               response_class=JSONResponse)
async def check_status(request: Request):
    """Run a fresh check cycle over every site."""
    if request.method != "GET":
        return JSONResponse({"error": "Method not allowed"}, status_code=405,
                            headers={"Allow": "GET"})
    try:
        snapshot = await checker.check_sites(SITES)
    except checker.CheckFailed:
        logger.exception("Status check failed")
        return JSONResponse({"error": "Failed to check site statuses"}, status_code=500)
    return JSONResponse(snapshot.to_dict(), headers=NO_STORE)
