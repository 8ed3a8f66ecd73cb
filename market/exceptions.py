"""
market/exceptions.py
====================
Exception hierarchy for the market backend.

Every domain error derives from MarketError, so the HTTP layer can render all
of them with one handler.

MarketError
├── ValidationError
├── NotFound
│   ├── NoSuchBranch
│   ├── NoSuchProduct
│   ├── NoSuchSale
│   └── NoSuchComing
├── BusinessRuleError
│   ├── InsufficientStock
│   └── InsufficientPayment
├── StoreError
│   └── CorruptSequence
└── OperationTimeout
"""


class MarketError(Exception):
    """Base exception for all market errors."""

    def __init__(self, message: str = "", *, detail: str = ""):
        super().__init__(message)
        self.message = message
        self.detail = detail      # extra context, logged only

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} | {self.detail}"
        return self.message


class ValidationError(MarketError):
    """Malformed id, bad query parameter or invalid payload value."""


# ─── Not found ───────────────────────────────────────────────────────────────

class NotFound(MarketError):
    """Raised when a requested record does not exist."""

    entity = "record"

    def __init__(self, id_value=None, **kwargs):
        if id_value is not None:
            message = f"{self.entity} {id_value} not found"
        else:
            message = kwargs.pop("message", "no rows in result set")
        super().__init__(message, **kwargs)
        self.id_value = id_value


class NoSuchBranch(NotFound):
    entity = "branch"


class NoSuchProduct(NotFound):
    entity = "product"


class NoSuchSale(NotFound):
    entity = "sale"


class NoSuchComing(NotFound):
    entity = "coming"


# ─── Business rules ──────────────────────────────────────────────────────────

class BusinessRuleError(MarketError):
    """A request that is well formed but violates a business rule."""


class InsufficientStock(BusinessRuleError):

    def __init__(self, product_id: str, branch_id: str, requested: int, available: int):
        super().__init__(
            "not enough quantity",
            detail=f"product={product_id} branch={branch_id} "
                   f"requested={requested} available={available}",
        )
        self.product_id = product_id
        self.branch_id = branch_id
        self.requested = requested
        self.available = available


class InsufficientPayment(BusinessRuleError):

    def __init__(self, amount: float, total_price: float):
        super().__init__(
            "not enough money",
            detail=f"amount={amount} total_price={total_price}",
        )
        self.amount = amount
        self.total_price = total_price


# ─── Store ───────────────────────────────────────────────────────────────────

class StoreError(MarketError):
    """Connectivity failures, constraint violations and other storage faults."""


class CorruptSequence(StoreError):
    """The stored increment id cannot be parsed."""


class OperationTimeout(MarketError):
    """The operation's deadline expired; nothing was committed."""
