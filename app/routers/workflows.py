# =============================================================================
# app/routers/workflows.py - Workflow CRUD Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from app.auth import get_current_user, AuthUser
from app.dependencies import WorkflowServiceDep
from core.models.workflow import WorkflowCreate, WorkflowResponse, WorkflowUpdate

router = APIRouter()


@router.get("", response_model=list[WorkflowResponse])
def list_workflows(
    workflows: WorkflowServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """List workflows, newest first."""
    return workflows.list()


@router.post("", response_model=WorkflowResponse, status_code=status.HTTP_201_CREATED)
def create_workflow(
    request: WorkflowCreate,
    workflows: WorkflowServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    return workflows.create(request.model_dump(mode="json"))


@router.get("/{workflow_id}", response_model=WorkflowResponse)
def get_workflow(
    workflow_id: Annotated[UUID, Path(description="Workflow UUID")],
    workflows: WorkflowServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    return workflows.get(workflow_id)


@router.patch("/{workflow_id}", response_model=WorkflowResponse)
def update_workflow(
    workflow_id: Annotated[UUID, Path(description="Workflow UUID")],
    request: WorkflowUpdate,
    workflows: WorkflowServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Update the fields sent in the request (no status transition rules)."""
    return workflows.update(workflow_id, request.model_dump(mode="json", exclude_unset=True))


@router.delete("/{workflow_id}")
def delete_workflow(
    workflow_id: Annotated[UUID, Path(description="Workflow UUID")],
    workflows: WorkflowServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    workflows.delete(workflow_id)

    return {
        "workflow_id": str(workflow_id),
        "message": "Workflow deleted successfully",
    }
