from market.crud import CRUDService
from market.exceptions import NoSuchProduct

from .models import Product

products = CRUDService(Product, search_fields=("name",), not_found=NoSuchProduct)
