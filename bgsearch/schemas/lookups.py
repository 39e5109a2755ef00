# bgsearch/schemas/lookups.py
from pydantic import BaseModel


class NamedEntity(BaseModel):
    id: int
    name: str

class AwardNameItem(BaseModel):
    name: str

class AwardTypeItem(BaseModel):
    type: str
