import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from teamtasks.api import health
from teamtasks.api.v1.endpoints import operations
from teamtasks.core.config import settings
from teamtasks.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    TaskServiceError,
    ValidationError,
)
from teamtasks.core.init_db import init_db
from teamtasks.core.metrics import PrometheusMiddleware, metrics_endpoint
from teamtasks.db.mongodb import close_mongo_connection, connect_to_mongo

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

ERROR_STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Team Tasks API for multi-tenant team and task management.

    ## Features
    * **Teams**: Create teams and invite members; the creator is the team admin.
    * **Tasks**: Admins create, edit, assign and delete tasks; assignees move them through statuses.
    * **Search**: Priority-ordered task lists and substring search, filtered by what each member may see.
    * **Notifications**: Best-effort notices on team and task changes.

    """,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
)

app.add_middleware(PrometheusMiddleware)


@app.on_event("startup")
async def startup_event():
    await connect_to_mongo()
    await init_db()


@app.on_event("shutdown")
async def shutdown_event():
    await close_mongo_connection()


@app.exception_handler(TaskServiceError)
async def task_service_error_handler(request: Request, exc: TaskServiceError):
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(operations.router, prefix=f"{settings.API_V1_STR}/operations", tags=["operations"])
app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], include_in_schema=False)


@app.get("/")
async def root():
    return {"message": "Welcome to Team Tasks API"}
