"""
Project collaboration endpoints.

Projects live as one array under projects:current and tasks under
tasks:all. Like everything else on the dashboard, updates for ids that
aren't stored are accepted as successful no-ops, and detail lookups for
unknown ids return a placeholder project instead of a 404.
"""

import logging
from typing import Any, Callable

from fastapi import APIRouter, Body, Depends

from organizeit import seeds
from organizeit.auth import get_clock, get_store, require_authorization
from organizeit.errors import masked
from organizeit.models.schemas import ProjectStatusUpdate, TeamMessage
from organizeit.store import KVStore, get_or_seed
from organizeit.telemetry import iso

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_authorization)], tags=["Projects"])

PROJECTS_KEY = "projects:current"
TASKS_KEY = "tasks:all"


def _detail_catalog() -> list[dict]:
    """Seed projects with their milestone detail, for a store with no projects."""
    return [
        {**p, "milestones": seeds.PROJECT_MILESTONES.get(p["id"], [])}
        for p in seeds.projects()
    ]


@router.get("/projects", summary="List projects")
@masked(lambda **_: seeds.projects_fallback())
async def list_projects(store: KVStore = Depends(get_store)) -> dict:
    projects = await get_or_seed(store, PROJECTS_KEY, seeds.projects)
    return {"projects": projects, "count": len(projects)}


@router.post(
    "/projects",
    summary="Create a project",
    description="Ids are sequential (PROJ-004, PROJ-005, ...). Body fields override defaults.",
)
async def create_project(
    project_data: dict[str, Any] = Body(default_factory=dict),
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    projects = await store.get(PROJECTS_KEY) or []

    new_project = {
        "id": f"PROJ-{len(projects) + 1:03d}",
        "created_at": iso(clock()),
        "progress": 0,
        "spent": 0,
        "status": "Planning",
        **project_data,
    }
    projects.append(new_project)
    await store.set(PROJECTS_KEY, projects)

    return {"project": new_project, "message": "Project created successfully"}


@router.post("/projects/update-status", summary="Update project status")
@masked({"message": "Project status updated successfully"})
async def update_project_status(
    update: ProjectStatusUpdate,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    updated_at = iso(clock())
    projects = await store.get(PROJECTS_KEY) or []

    project = next((p for p in projects if p.get("id") == update.project_id), None)
    if project is not None:
        project["status"] = update.status
        if update.notes:
            project["notes"] = update.notes
        project["updated_at"] = updated_at
        await store.set(PROJECTS_KEY, projects)

    return {
        "project": {
            "id": update.project_id,
            "status": update.status,
            "notes": update.notes,
            "updated_at": updated_at,
        },
        "message": "Project status updated successfully",
    }


@router.get("/projects/{project_id}/details", summary="Project details")
@masked(lambda project_id, clock, **_: {
    "project": seeds.project_placeholder(project_id, clock()),
    "message": "Project details retrieved",
})
async def project_details(
    project_id: str,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    projects = await store.get(PROJECTS_KEY)
    if not projects or not isinstance(projects, list):
        projects = _detail_catalog()

    project = next((p for p in projects if p.get("id") == project_id), None)
    if project is None:
        project = seeds.project_placeholder(project_id, clock())

    return {"project": project, "message": "Project details retrieved"}


# ---------------------------------------------------------------------------
# Tasks and team chat
# ---------------------------------------------------------------------------

@router.post("/projects/create-task", summary="Create a task")
async def create_task(
    task_data: dict[str, Any] = Body(default_factory=dict),
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    tasks = await store.get(TASKS_KEY) or []

    new_task = {
        "id": f"TASK-{len(tasks) + 1:03d}",
        "created_at": iso(clock()),
        "status": "Open",
        **task_data,
    }
    tasks.append(new_task)
    await store.set(TASKS_KEY, tasks)

    return {"task": new_task, "message": "Task created successfully"}


@router.post("/projects/tasks/{task_id}/edit", summary="Edit a task")
@masked({"message": "Task updated successfully"})
async def edit_task(
    task_id: str,
    updates: dict[str, Any] = Body(default_factory=dict),
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    updated_at = iso(clock())
    tasks = await store.get(TASKS_KEY) or []

    for i, task in enumerate(tasks):
        if task.get("id") == task_id:
            tasks[i] = {**task, **updates, "updated_at": updated_at}
            await store.set(TASKS_KEY, tasks)
            break

    return {
        "task": {"id": task_id, **updates, "updated_at": updated_at},
        "message": "Task updated successfully",
    }


@router.post("/team/message", summary="Post to a team channel")
async def team_message(
    msg: TeamMessage,
    store: KVStore = Depends(get_store),
    clock: Callable[[], float] = Depends(get_clock),
) -> dict:
    now = clock()
    message_id = f"MSG-{int(now * 1000)}"
    await store.set(message_id, {
        "id": message_id,
        "user_id": msg.user_id,
        "message": msg.message,
        "channel": msg.channel or "general",
        "timestamp": iso(now),
    })
    return {"message": "Message sent successfully"}
