import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import database, service
from .config import get_settings
from .database import get_db
from .errors import InvalidInput, NotFound, TaskError
from .models import Message, TaskCreate, TaskOut, TaskUpdate

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    database.init_db()
    yield
    database.engine.dispose()
    logger.info("Task store pool disposed")


app = FastAPI(title="Task List", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskError)
async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(error["loc"][0] == "path" for error in errors):
        # An id that cannot name a row is reported the same way as a missing row.
        task_id = request.path_params.get("task_id")
        return JSONResponse(status_code=NotFound.status_code, content={"detail": f"Task {task_id} not found."})
    message = errors[0]["msg"] if errors else "Invalid request."
    logger.debug("Rejected request %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=InvalidInput.status_code, content={"detail": message})


@app.get("/", status_code=200)
def read_root() -> dict:
    return {"message": "Server is running!"}


@app.get("/api/tasks", status_code=200)
def get_tasks(db: Session = Depends(get_db)) -> list[TaskOut]:
    return service.list_tasks(db)


@app.post("/api/tasks", status_code=201)
def create_task(task: TaskCreate, db: Session = Depends(get_db)) -> TaskOut:
    return service.create_task(db, task.name)


@app.patch("/api/tasks/{task_id}", status_code=200)
def update_task(task_id: int, task: TaskUpdate, db: Session = Depends(get_db)) -> Message:
    service.update_task(db, task_id, task.supplied_fields())
    return Message(message="Task updated successfully.")


@app.delete("/api/tasks/{task_id}", status_code=204)
def delete_task(task_id: int, db: Session = Depends(get_db)) -> Response:
    service.delete_task(db, task_id)
    return Response(status_code=204)
