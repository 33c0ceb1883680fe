from dataclasses import dataclass
from typing import Optional


@dataclass
class OperationResult:
    """Result of a mutation, rendered as a notification by the routes."""
    success: bool
    message: str
    data: Optional[dict] = None
    error: Optional[str] = None

    def to_dict(self):
        payload = {'success': self.success, 'message': self.message}
        if self.data is not None:
            payload['data'] = self.data
        if self.error:
            payload['error'] = self.error
        return payload
