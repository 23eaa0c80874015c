"""Request schemas for API endpoints"""
from pydantic import BaseModel, Field


class UnlockRequest(BaseModel):
    """Shared password that unlocks editing on this device"""
    password: str = Field(..., min_length=1, max_length=200)


class LogoutRequest(BaseModel):
    """Logout only happens when the user confirmed it"""
    confirm: bool = False


class MemoRequest(BaseModel):
    tips: str = Field(..., max_length=5000, description="Day memo text")


class SuggestionRequest(BaseModel):
    """Location and time of day to ask a travel tip for"""
    location: str = Field(..., min_length=1, max_length=200)
    time_of_day: str = Field(default="daytime", max_length=50)


class CategoryRequest(BaseModel):
    label: str = Field(..., min_length=1, max_length=50)


class TodoRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=500)
    category: str = Field(default="todo")
