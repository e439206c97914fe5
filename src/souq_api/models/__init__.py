"""SQLAlchemy models package."""

from .hero_banner import DEFAULT_BANNER_COPY, HeroBanner  # noqa: F401
from .order import Order, OrderItem, OrderStatusEnum, PaymentMethodEnum  # noqa: F401
from .product import Product  # noqa: F401
from .webhook import Webhook  # noqa: F401
