from pydantic import BaseModel


class DeletedResponse(BaseModel):
    """Schema for delete responses: the key of the removed row"""
    deleted: str
