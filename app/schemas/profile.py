from uuid import UUID
from pydantic import BaseModel


class Profile(BaseModel):
    id: UUID
    edipi: str
    username: str
    email: str
    is_admin: bool

    class Config:
        from_attributes = True
