from sqlalchemy import Column, Integer, Numeric, String, Text

from souq_api.db.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    brand = Column(String, nullable=False)
    category = Column(String, nullable=False)
    original_price = Column(Numeric(10, 2), nullable=False)
    discounted_price = Column(Numeric(10, 2), nullable=False)
    discount = Column(Integer, nullable=False)
    image = Column(Text, nullable=False, default="")
    stock = Column(Integer, nullable=False, default=0, server_default="0")
