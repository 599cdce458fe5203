# dial_backend/app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dial_backend.app.config import APP_ENV, CORS_ORIGINS, DEBUG_MODE, validate_manifest
from dial_backend.app.routers import catalog, recipe

log = logging.getLogger("dial.api")
if not log.handlers:
    log.addHandler(logging.StreamHandler())
    log.setLevel(logging.INFO)

# per-recipe traces only when DEBUG is set
engine_log = logging.getLogger("dial.recipe_engine")
if not engine_log.handlers:
    engine_log.addHandler(logging.StreamHandler())
engine_log.setLevel(logging.DEBUG if DEBUG_MODE else logging.INFO)

app = FastAPI(title="Dial API")

# --- CORS for the web frontend ------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Routers under /api -------------------------------------------------------
app.include_router(recipe.router, prefix="/api")    # /api/recipe/...
app.include_router(catalog.router, prefix="/api")   # /api/catalog/...

# --- Health / manifest --------------------------------------------------------
@app.get("/health")
async def health():
    return {"ok": True}

@app.get("/api/health")
async def api_health():
    # mirror the non-prefixed /health so the FE's /api/health succeeds
    return {"ok": True}

@app.get("/api/manifest")
async def manifest():
    return validate_manifest()

@app.on_event("startup")
async def _report_reference_files():
    report = validate_manifest()
    if report["missing_required"]:
        log.warning("[%s] missing required reference files: %s", APP_ENV, ", ".join(report["missing_required"]))
    else:
        log.info("[%s] reference files ok", APP_ENV)
