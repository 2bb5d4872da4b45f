# tasktracker/routers/task.py
from fastapi import APIRouter, Depends, status

from tasktracker.dependencies.payload import read_task_create
from tasktracker.dependencies.service import get_task_service
from tasktracker.schemas.task import TaskCreate, TaskRead
from tasktracker.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


# Sync handlers run in the threadpool, so a full queue blocks only this request.
@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": TaskCreate.model_json_schema()}},
        }
    },
)
def create_task(
    payload: TaskCreate = Depends(read_task_create),
    service: TaskService = Depends(get_task_service),
):
    return service.create_task(payload)


@router.get("", response_model=list[TaskRead])
def list_tasks(service: TaskService = Depends(get_task_service)):
    return service.list_tasks()
