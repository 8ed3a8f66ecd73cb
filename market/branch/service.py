from market.crud import CRUDService
from market.exceptions import NoSuchBranch

from .models import Branch

branches = CRUDService(Branch, search_fields=("name", "phone"), not_found=NoSuchBranch)
