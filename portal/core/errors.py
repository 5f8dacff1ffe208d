"""
Error taxonomy for the placement core.

Services raise these; the API layer turns them into JSON responses with
`register_exception_handlers`. Every error is terminal for the operation
that raised it - nothing in the portal retries automatically.
"""

from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class PortalError(Exception):
    kind = "PortalError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class ValidationError(PortalError):
    """Malformed or out-of-range input, rejected before any write."""

    kind = "ValidationError"
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["field"] = self.field
        return data


class DuplicateApplication(PortalError):
    kind = "DuplicateApplication"
    status_code = 409

    def __init__(self, message: str = "Already applied to this listing"):
        super().__init__(message)


class IneligibleError(PortalError):
    """Create attempted against a failing eligibility verdict."""

    kind = "IneligibleError"
    status_code = 400

    def __init__(self, reasons: List[str]):
        super().__init__("Not eligible for this listing")
        self.reasons = list(reasons)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["reasons"] = self.reasons
        return data


class AuthorizationError(PortalError):
    kind = "AuthorizationError"
    status_code = 403

    def __init__(self):
        # No role detail in the message
        super().__init__("Not permitted")


class NotFoundError(PortalError):
    kind = "NotFoundError"
    status_code = 404

    def __init__(self, entity: str, entity_id=None):
        message = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(message + "; refresh and try again")
        self.entity = entity


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, portal_error_handler)
