from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class CreateRequest(BaseModel):
    data: str

class TamperRequest(BaseModel):
    index: int
    newData: str

class BlockOut(BaseModel):
    data: str
    signature: str

class CreateResponse(BaseModel):
    success: bool = True
    block: BlockOut

class BlockInfo(BaseModel):
    data: str
    status: str

class InformationResponse(BaseModel):
    success: bool = True
    information: List[BlockInfo] = Field(default_factory=list)
    summary: Optional[Dict[str, Any]] = None
