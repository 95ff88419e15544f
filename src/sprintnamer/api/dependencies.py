"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from sprintnamer.service import SprintNamerService


def get_optional_service(request: Request) -> SprintNamerService | None:
    """Service instance held by the application, if it has been created."""
    return getattr(request.app.state, "service", None)


async def get_service(request: Request) -> SprintNamerService:
    """Dependency to get the SprintNamerService instance."""
    service = get_optional_service(request)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return service


ServiceDep = Annotated[SprintNamerService, Depends(get_service)]
