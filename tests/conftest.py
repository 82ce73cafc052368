"""
Pytest configuration and global fixtures.
"""
import sys
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.models import Detection, InspectionData, InspectionPhoto, PropertyInfo
from data.db_models import Base


@pytest.fixture(scope="session")
def test_db_engine():
    """Create in-memory SQLite engine for tests."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture
def test_db_session(test_db_engine):
    """Create fresh database session for each test."""
    Session = sessionmaker(bind=test_db_engine)
    session = Session()

    yield session

    # Rollback any uncommitted changes and close
    session.rollback()
    session.close()


@pytest.fixture
def temp_dir(tmp_path):
    """Provide temporary directory for test files."""
    return tmp_path


@pytest.fixture
def sample_image_path(temp_dir):
    """Create a sample test image."""
    from PIL import Image

    img_path = temp_dir / "test_image.png"
    img = Image.new('RGB', (800, 600), color='white')
    img.save(img_path)

    return str(img_path)


@pytest.fixture
def sample_base64_image():
    """Provide base64 encoded sample image."""
    import base64
    from io import BytesIO
    from PIL import Image

    img = Image.new('RGB', (100, 100), color='blue')
    buf = BytesIO()
    img.save(buf, format='PNG')
    return base64.b64encode(buf.getvalue()).decode()


def make_detection(item, condition="good", room="Sala", **fields):
    """Build a Detection with test defaults."""
    return Detection(item=item, condition=condition, room=room, **fields)


@pytest.fixture
def property_info():
    """Property shown in report headers."""
    return PropertyInfo(
        name="Apartamento Centro",
        address="Rua das Flores, 100",
        company_name="Vistoria Fácil",
        responsible_name="Ana Souza",
        property_id="prop-1",
    )


@pytest.fixture
def entry_inspection():
    """Entry inspection with a living room and a kitchen."""
    return InspectionData(
        inspection_id="entry-1",
        inspection_type="entry",
        inspection_date=datetime(2024, 1, 10),
        photos=[
            InspectionPhoto(
                url="entry-sala.jpg",
                room="Sala",
                detections=(
                    make_detection("Sofá", "good", "Sala", source_photo_url="entry-sala.jpg"),
                    make_detection("Mesa", "good", "Sala", source_photo_url="entry-sala.jpg"),
                    make_detection("Cadeira", "good", "Sala", source_photo_url="entry-sala.jpg"),
                ),
            ),
            InspectionPhoto(
                url="entry-cozinha.jpg",
                room="Cozinha",
                detections=(
                    make_detection("Geladeira", "good", "Cozinha", source_photo_url="entry-cozinha.jpg"),
                ),
            ),
        ],
    )


@pytest.fixture
def exit_inspection():
    """Exit inspection: sofa damaged, chair missing, lamp new, new bathroom."""
    return InspectionData(
        inspection_id="exit-1",
        inspection_type="exit",
        inspection_date=datetime(2024, 12, 20),
        photos=[
            InspectionPhoto(
                url="exit-sala.jpg",
                room="Sala",
                detections=(
                    make_detection(" sofá ", "damaged", "Sala", source_photo_url="exit-sala.jpg"),
                    make_detection("Mesa", "good", "Sala", source_photo_url="exit-sala.jpg"),
                    make_detection("Luminária", "new", "Sala", source_photo_url="exit-sala.jpg"),
                ),
            ),
            InspectionPhoto(
                url="exit-cozinha.jpg",
                room="Cozinha",
                detections=(
                    make_detection("Geladeira", "good", "Cozinha", source_photo_url="exit-cozinha.jpg"),
                ),
            ),
            InspectionPhoto(
                url="exit-banheiro.jpg",
                room="Banheiro",
                detections=(
                    make_detection("Espelho", "good", "Banheiro", source_photo_url="exit-banheiro.jpg"),
                ),
            ),
        ],
    )
