"""Response schemas for API endpoints"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from ..core import CollectionState, ConnectionStatus, GateState
from ..services.todos import TodoProgress


class MutationResponse(BaseModel):
    """Result of an edit; read-only callers get applied=false and unchanged data"""
    applied: bool = Field(..., description="False when the caller is read-only")
    data: Any = Field(..., description="Collection after the edit, in document form")


class TripStateResponse(BaseModel):
    trip: Dict[str, Any] = Field(..., description="All collections in document form")
    loading: bool
    connection_status: ConnectionStatus
    collection_states: Dict[str, CollectionState]
    access: GateState


class AuthStatusResponse(BaseModel):
    access: GateState


class SettlementResponse(BaseModel):
    debtor: str
    creditor: str
    amount_aud: float
    amount_twd: float
    message: str


class BalanceResponse(BaseModel):
    rate: float = Field(..., description="NT$ per A$1")
    balances: Dict[str, float] = Field(..., description="Net AUD balance per user")
    settlement: SettlementResponse


class ConversionResponse(BaseModel):
    rate: float
    aud: float
    twd: float


class SuggestionResponse(BaseModel):
    suggestion_text: str


class NavigationResponse(BaseModel):
    url: Optional[str] = Field(None, description="Map or navigation URL, opened verbatim")


class CurrentDayResponse(BaseModel):
    day_index: int
    date: Optional[str] = None


class TodoSummaryResponse(BaseModel):
    progress: TodoProgress
    groups: Dict[str, List[Dict[str, Any]]]


class ErrorResponse(BaseModel):
    """Error response"""
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[dict] = Field(None, description="Additional error details")
