"""CEP lookup used by the new-order form to fill in the delivery address."""

from typing import Annotated

from fastapi import APIRouter, Depends

from chamalog.api.routes.auth import require_staff
from chamalog.core.config import Settings, get_settings
from chamalog.schemas.auth import CurrentUser
from chamalog.schemas.postal_code import PostalAddress
from chamalog.services.postal_code import lookup_cep

router = APIRouter()


@router.get("/{cep}", response_model=PostalAddress)
async def get_address(
    cep: str,
    _user: Annotated[CurrentUser, Depends(require_staff)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PostalAddress:
    return await lookup_cep(cep, settings)
