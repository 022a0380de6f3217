import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import TaskStoreError
from .logging_setup import setup_logging
from .repositories import TaskStore, get_store
from .routers import tasks as tasks_router
from .settings import get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "tasks",
        "description": "Create, list, fetch, update and delete tasks.",
    },
]

_settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(_settings.log_level)
    logger.info("Task backend starting (%d tasks loaded)", get_store().count())
    yield
    logger.info("Task backend shutting down")


app = FastAPI(
    title="Task Backend",
    description="In-memory task tracking service.",
    version="0.1.0",
    openapi_tags=openapi_tags,
    lifespan=lifespan,
)

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=not allow_all,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskStoreError)
async def task_store_exception_handler(request: Request, exc: TaskStoreError) -> JSONResponse:
    """
    Translate store failures into `{"error": <message>}` with the error's status code.
    """
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed request bodies are client errors like any other validation failure.

    Response format:
        {
            "error": "<first validation message>",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Request validation failed"
    return JSONResponse(
        status_code=400,
        content={"error": message, "detail": jsonable_encoder(errors)},
    )


# PUBLIC_INTERFACE
@app.get("/", summary="Health Check", tags=["health"])
def health_check(store: TaskStore = Depends(get_store)):
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health and the number of stored tasks.
    """
    return {"message": "Healthy", "tasks": store.count()}


app.include_router(tasks_router.router)
