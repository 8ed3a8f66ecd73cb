# Import every model so relationships resolve and create_all sees all tables.
from market.branch.models import Branch  # noqa: F401
from market.client.models import Client  # noqa: F401
from market.coming.models import Coming  # noqa: F401
from market.picking_list.models import PickingList  # noqa: F401
from market.product.models import Product  # noqa: F401
from market.remainder.models import Remainder  # noqa: F401
from market.sale.models import Sale, SaleProduct  # noqa: F401
