# tasktracker/dependencies/payload.py
from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from tasktracker.core.errors import ValidationError
from tasktracker.schemas.task import TaskCreate


async def read_task_create(request: Request) -> TaskCreate:
    """
    Parse the raw body as a TaskCreate whatever the Content-Type says.

    Only a body that is not a JSON object with a title is rejected.
    """
    raw = await request.body()
    try:
        return TaskCreate.model_validate_json(raw)
    except PydanticValidationError as e:
        raise ValidationError() from e
