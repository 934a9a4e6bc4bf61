from pydantic import BaseModel, Field
from app.modules.roster.schemas import ActionResponse

# ==================== REQUEST SCHEMAS ====================

class SellerActionRequest(BaseModel):
    seller: str = Field(..., description="Nombre del vendedor")

# ==================== RESPONSE SCHEMAS ====================

class TakeCustomerResponse(ActionResponse):
    customer_id: str = Field(..., description="Identificador generado del cliente")
