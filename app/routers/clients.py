# =============================================================================
# app/routers/clients.py - Client CRUD Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from app.auth import get_current_user, AuthUser
from app.dependencies import ClientServiceDep
from core.models.client import ClientCreate, ClientResponse, ClientUpdate

router = APIRouter()


@router.get("", response_model=list[ClientResponse])
def list_clients(
    clients: ClientServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """List clients, newest first."""
    return clients.list()


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    request: ClientCreate,
    clients: ClientServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Create a client owned by the current user."""
    return clients.create(request.model_dump(mode="json"), created_by=user.id)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: Annotated[UUID, Path(description="Client UUID")],
    clients: ClientServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    return clients.get(client_id)


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: Annotated[UUID, Path(description="Client UUID")],
    request: ClientUpdate,
    clients: ClientServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update the fields sent in the request.

    Any status may be set from any other.
    """
    return clients.update(client_id, request.model_dump(mode="json", exclude_unset=True))


@router.delete("/{client_id}")
def delete_client(
    client_id: Annotated[UUID, Path(description="Client UUID")],
    clients: ClientServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    clients.delete(client_id)

    return {
        "client_id": str(client_id),
        "message": "Client deleted successfully",
    }
