"""Trip state synchronization and access control"""
from .controller import (
    TRIP_SCHEMA_VERSION,
    CollectionState,
    ConnectionStatus,
    TripSnapshot,
    TripStateController,
)
from .gate import AccessGate, GateState
