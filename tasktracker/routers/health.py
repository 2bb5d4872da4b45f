# tasktracker/routers/health.py
from fastapi import APIRouter, Depends

from tasktracker.dependencies.service import get_task_service
from tasktracker.services.task_service import TaskService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/db")
def health_db(service: TaskService = Depends(get_task_service)):
    # StorageError -> 500 "database connection failed"
    service.store.ping()
    return {"ok": True}


@router.get("/worker")
def health_worker(service: TaskService = Depends(get_task_service)):
    worker = service.worker
    return {
        "ok": worker.is_alive,
        "queued": len(service.queue),
        "capacity": service.queue.capacity,
        "processed": worker.processed,
        "failed": worker.failed,
    }
