from market.crud import CRUDService

from .models import Client

clients = CRUDService(
    Client,
    search_fields=("first_name", "last_name", "father_name", "phone"),
)
