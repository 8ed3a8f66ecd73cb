from pydantic import BaseModel


class BranchDoc(BaseModel):
    branch_id: str
    branch_name: str
    total_sale_price: float
    total_sale_quantity: int
