"""Errors raised by collection operations"""


class UnknownRecordError(LookupError):
    """Raised when an operation targets a day, event or record that does not exist"""
    def __init__(self, kind: str, record_id):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"Unknown {kind}: {record_id}")
