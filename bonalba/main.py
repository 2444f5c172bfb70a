from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import importlib
import logging

from bonalba.core.config import settings
from bonalba.core.firebase_init import initialize_firebase, get_firebase_status

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

if settings.KV_BACKEND != "memory":
    logger.info("Initializing Firebase for FastAPI app...")
    if initialize_firebase():
        logger.info("Firebase initialized successfully")
    else:
        logger.warning("Firebase initialization failed - app will run without Firebase features")

app = FastAPI(
    title="Bonalba API",
    description="Restaurant operations: checklists, APPCC, incidencias, exams and messages",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Every error leaves the API as {"error": "<message>"}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    logger.info(f"Validation failed on {request.url.path}: {messages}")
    return JSONResponse(status_code=422, content={"error": "; ".join(messages) or "Datos inválidos"})


def safe_include_router(router_module_path: str, router_name: str = "router"):
    """Safely include a router with error handling"""
    try:
        module = importlib.import_module(router_module_path)
        router = getattr(module, router_name)
        app.include_router(router, prefix=settings.API_PREFIX)
        logger.info(f"Successfully included {router_module_path}")
        return True
    except Exception as e:
        logger.exception(f"Failed to include {router_module_path}: {str(e)}")
        return False


logger.info("Loading routers...")

routers_to_load = [
    ("bonalba.routers.system", "System"),
    ("bonalba.routers.auth", "Authentication"),
    ("bonalba.routers.checklists", "Checklists"),
    ("bonalba.routers.incidencias", "Incidencias"),
    ("bonalba.routers.appcc", "APPCC"),
    ("bonalba.routers.equipment", "Equipment"),
    ("bonalba.routers.historico", "Historico"),
    ("bonalba.routers.users", "Users"),
    ("bonalba.routers.exams", "Exams"),
    ("bonalba.routers.messages", "Messages"),
]

successful_routers = []
failed_routers = []

for router_path, router_description in routers_to_load:
    if safe_include_router(router_path):
        successful_routers.append(router_description)
    else:
        failed_routers.append(router_description)

logger.info(f"Successfully loaded routers: {successful_routers}")
if failed_routers:
    logger.warning(f"Failed to load routers: {failed_routers}")


@app.get("/")
async def root():
    return {
        "message": "Welcome to the Bonalba API",
        "kv_backend": settings.KV_BACKEND,
        "firebase_status": get_firebase_status(),
        "loaded_routers": successful_routers,
        "failed_routers": failed_routers
    }
