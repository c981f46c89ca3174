"""Bearer-token authentication dependency shared by the customer-facing routers."""

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from identity.shared.security import decode_token

_bearer = HTTPBearer(auto_error=False)


async def current_customer_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str:
    """Customer id from a valid `Authorization: Bearer <token>` header, else 401."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Authentication required")

    customer_id = decode_token(credentials.credentials)
    if not customer_id:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return customer_id
