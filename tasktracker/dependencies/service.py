# tasktracker/dependencies/service.py
from fastapi import Request

from tasktracker.services.task_service import TaskService


def get_task_service(request: Request) -> TaskService:
    """FastAPI Depends(get_task_service): the service built in the lifespan."""
    return request.app.state.task_service
