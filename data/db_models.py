"""
Database models for properties, inspections and inspection photos.

Photos keep the AI analysis result as JSON; detected objects are read from
its ``objectsDetected`` list.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, JSON, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def generate_uuid():
    """Generate UUID string for primary keys."""
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Property(Base):
    """Inspected property."""

    __tablename__ = 'properties'

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    address = Column(String, default="")
    property_type = Column(String)  # 'apartment', 'house', 'office', ...
    description = Column(Text)
    company_name = Column(String)
    company_logo_url = Column(String)
    responsible_name = Column(String)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    inspections = relationship("Inspection", back_populates="property_record", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Property(id={self.id}, name={self.name})>"


class Inspection(Base):
    """One entry or exit inspection of a property."""

    __tablename__ = 'inspections'

    id = Column(String, primary_key=True, default=generate_uuid)
    property_id = Column(String, ForeignKey('properties.id'), nullable=False)
    inspection_type = Column(String, nullable=False)  # 'entry' or 'exit'
    status = Column(String, nullable=False, default='pending')  # 'pending', 'in-progress', 'completed'
    general_observations = Column(Text)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    property_record = relationship("Property", back_populates="inspections")
    photos = relationship(
        "InspectionPhoto",
        back_populates="inspection",
        cascade="all, delete-orphan",
        order_by="InspectionPhoto.sequence_order"
    )

    def __repr__(self):
        return f"<Inspection(id={self.id}, type={self.inspection_type}, status={self.status})>"


class InspectionPhoto(Base):
    """Room photo with its AI analysis result."""

    __tablename__ = 'inspection_photos'

    id = Column(String, primary_key=True, default=generate_uuid)
    inspection_id = Column(String, ForeignKey('inspections.id'), nullable=False)
    room = Column(String, nullable=False)
    photo_url = Column(String, nullable=False)
    analysis_result = Column(JSON)

    # Capture order within the inspection
    sequence_order = Column(Integer, default=0)

    created_at = Column(DateTime, default=utcnow)

    # Relationships
    inspection = relationship("Inspection", back_populates="photos")

    def __repr__(self):
        return f"<InspectionPhoto(id={self.id}, room={self.room})>"

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'id': self.id,
            'inspection_id': self.inspection_id,
            'room': self.room,
            'photo_url': self.photo_url,
            'analysis_result': self.analysis_result,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
