from sqlalchemy import Column, String, Uuid
from app.core.database import Base
import uuid

class Song(Base):
    __tablename__ = "songs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    url = Column(String, nullable=False)
    original_filename = Column(String, nullable=False)
