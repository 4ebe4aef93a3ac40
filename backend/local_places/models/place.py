"""Point of interest shown on the map and managed through chat tools."""
from sqlalchemy import Column, DateTime, Float, Integer, String, Text
from sqlalchemy.sql import func

from local_places.db.base import Base


class Place(Base):
    __tablename__ = "places"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False, index=True)
    category = Column(String(32), nullable=False, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    rating = Column(Float, nullable=False, default=0)
    price_level = Column(Integer, nullable=False, default=2)
    description = Column(Text, nullable=True)
    amenities = Column(Text, nullable=True)  # JSON array of strings, e.g. ["wifi", "parking"]
    hours = Column(String(256), nullable=True)
    address = Column(String(512), nullable=True)
    phone = Column(String(64), nullable=True)
    website = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
