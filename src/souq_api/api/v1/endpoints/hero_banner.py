from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from souq_api.db.session import get_session
from souq_api.models.hero_banner import HeroBanner
from souq_api.schemas.hero_banner import HeroBannerRecord, default_banner_payload

router = APIRouter(tags=["Storefront"])


@router.get("/hero-banner", summary="Active hero banner copy")
async def get_hero_banner(session: AsyncSession = Depends(get_session)) -> Dict[str, Any]:
    result = await session.execute(
        select(HeroBanner).where(HeroBanner.is_active.is_(True)).order_by(HeroBanner.id.desc()).limit(1)
    )
    banner = result.scalar_one_or_none()
    if banner is None:
        return default_banner_payload()
    return HeroBannerRecord.model_validate(banner).to_payload()
