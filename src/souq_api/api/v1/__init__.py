from fastapi import APIRouter

from .endpoints import (
    ai_marketing,
    health,
    hero_banner,
    orders,
    webhooks,
)

router = APIRouter()
router.include_router(health.router, tags=["Health"])
router.include_router(hero_banner.router)
router.include_router(orders.router)
router.include_router(ai_marketing.router)
router.include_router(webhooks.router)
