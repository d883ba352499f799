from typing import Optional
from pydantic import BaseModel

class Specialty(BaseModel):
    id: int
    name: str
    code: Optional[int] = None

    model_config = {"from_attributes": True}
