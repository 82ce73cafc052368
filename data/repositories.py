"""
Repository pattern for data access.

Provides clean separation between data access and business logic. Loaded
inspections are converted into core InspectionData records so the diff
engine never sees ORM objects.
"""
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from core.constants import INSPECTION_ENTRY, INSPECTION_EXIT
from core.exceptions import InspectionPairError
from core.models import InspectionData, PropertyInfo
from data.db_models import Inspection, InspectionPhoto, Property
from inspection.parsing import photo_from_dict


class PropertyRepository:
    """Repository for Property operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, name: str, address: str = "", **fields) -> Property:
        """Create a new property."""
        prop = Property(name=name, address=address, **fields)
        self.session.add(prop)
        self.session.commit()
        self.session.refresh(prop)
        return prop

    def get_by_id(self, property_id: str) -> Optional[Property]:
        """Get property by ID."""
        return self.session.query(Property).filter(
            Property.id == property_id
        ).first()

    def get_property_info(self, property_id: str) -> PropertyInfo:
        """
        Load property header details.

        Raises:
            ValueError: If the property does not exist
        """
        prop = self.get_by_id(property_id)
        if prop is None:
            raise ValueError(f"Property not found: {property_id}")
        return PropertyInfo(
            name=prop.name,
            address=prop.address or "",
            company_name=prop.company_name,
            company_logo_url=prop.company_logo_url,
            responsible_name=prop.responsible_name,
            property_id=prop.id,
        )


class InspectionRepository:
    """Repository for Inspection and InspectionPhoto operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, property_id: str, inspection_type: str, status: str = 'pending') -> Inspection:
        """Create a new inspection."""
        inspection = Inspection(
            property_id=property_id,
            inspection_type=inspection_type,
            status=status
        )
        self.session.add(inspection)
        self.session.commit()
        self.session.refresh(inspection)
        return inspection

    def add_photo(
        self,
        inspection_id: str,
        room: str,
        photo_url: str,
        analysis_result: Optional[dict] = None
    ) -> InspectionPhoto:
        """Attach a photo (and its AI analysis) to an inspection, after existing photos."""
        count = self.session.query(InspectionPhoto).filter(
            InspectionPhoto.inspection_id == inspection_id
        ).count()
        photo = InspectionPhoto(
            inspection_id=inspection_id,
            room=room,
            photo_url=photo_url,
            analysis_result=analysis_result,
            sequence_order=count
        )
        self.session.add(photo)
        self.session.commit()
        self.session.refresh(photo)
        return photo

    def get_by_id(self, inspection_id: str) -> Optional[Inspection]:
        """Get inspection by ID."""
        return self.session.query(Inspection).filter(
            Inspection.id == inspection_id
        ).first()

    def get_photos(self, inspection_id: str) -> List[InspectionPhoto]:
        """Get photos of an inspection in capture order."""
        return self.session.query(InspectionPhoto)\
            .filter(InspectionPhoto.inspection_id == inspection_id)\
            .order_by(InspectionPhoto.sequence_order, InspectionPhoto.created_at)\
            .all()

    def load_inspection_data(self, inspection_id: str) -> InspectionData:
        """
        Load an inspection with its detections.

        Raises:
            ValueError: If the inspection does not exist
        """
        inspection = self.get_by_id(inspection_id)
        if inspection is None:
            raise ValueError(f"Inspection not found: {inspection_id}")

        photos = [
            photo_from_dict({
                'id': p.id,
                'url': p.photo_url,
                'room': p.room,
                'analysis_result': p.analysis_result,
            })
            for p in self.get_photos(inspection_id)
        ]
        return InspectionData(
            inspection_id=inspection.id,
            inspection_type=inspection.inspection_type,
            inspection_date=inspection.created_at,
            photos=photos,
        )

    def find_latest_completed_pair(self, property_id: str) -> Optional[Tuple[Inspection, Inspection]]:
        """
        Find the latest completed exit inspection of a property and its entry inspection.

        Returns:
            (entry, exit) inspections, or None when either is missing
        """
        base = self.session.query(Inspection).filter(
            Inspection.property_id == property_id,
            Inspection.status == 'completed'
        )
        exit_inspection = base.filter(Inspection.inspection_type == INSPECTION_EXIT)\
            .order_by(Inspection.created_at.desc())\
            .first()
        if exit_inspection is None:
            return None

        entry_inspection = base.filter(Inspection.inspection_type == INSPECTION_ENTRY)\
            .order_by(Inspection.created_at.desc())\
            .first()
        if entry_inspection is None:
            return None

        return entry_inspection, exit_inspection

    def get_comparison_pair(self, entry_id: str, exit_id: str) -> Tuple[Inspection, Inspection]:
        """
        Fetch an entry and an exit inspection of the same property.

        Raises:
            ValueError: If either inspection does not exist
            InspectionPairError: If the types are wrong or the properties differ
        """
        entry_inspection = self.get_by_id(entry_id)
        if entry_inspection is None:
            raise ValueError(f"Inspection not found: {entry_id}")
        exit_inspection = self.get_by_id(exit_id)
        if exit_inspection is None:
            raise ValueError(f"Inspection not found: {exit_id}")

        if entry_inspection.inspection_type != INSPECTION_ENTRY:
            raise InspectionPairError(f"Inspection {entry_id} is not an entry inspection")
        if exit_inspection.inspection_type != INSPECTION_EXIT:
            raise InspectionPairError(f"Inspection {exit_id} is not an exit inspection")
        if entry_inspection.property_id != exit_inspection.property_id:
            raise InspectionPairError(
                f"Inspections {entry_id} and {exit_id} belong to different properties"
            )

        return entry_inspection, exit_inspection
