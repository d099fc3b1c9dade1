"""
Client Routes

GET /clients - List clients with their job counts
POST /clients - Create client (company names are unique)
"""

from fastapi import APIRouter, Depends

from app.schemas.schemas import ClientCreate
from app.services.store_service import ClientService, get_client_service
from app.utils.normalize import normalize_email, require_fields

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("")
def list_clients(clients: ClientService = Depends(get_client_service)):
    return {"clients": clients.list()}


@router.post("", status_code=201)
def create_client(data: ClientCreate, clients: ClientService = Depends(get_client_service)):
    require_fields(data.model_dump(), "company")

    client = clients.create(
        company=data.company,
        contact_person=data.contact_person or None,
        email=normalize_email(data.email) if data.email else None
    )
    return {"client": client}
