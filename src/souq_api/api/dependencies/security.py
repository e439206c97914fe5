import hmac

from fastapi import Header, HTTPException, status

from souq_api.core.settings import settings


async def require_admin_api_key(x_admin_key: str = Header("", alias="X-Admin-Key")) -> None:
    if not settings.admin_api_key:
        return

    if not hmac.compare_digest(x_admin_key.encode("utf-8"), settings.admin_api_key.encode("utf-8")):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin API key",
        )
