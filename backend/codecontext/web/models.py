"""SQLAlchemy models."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .database import Base


class SourceFileRow(Base):
    """Uploaded source file."""

    __tablename__ = "source_files"

    id = Column(String(64), primary_key=True)
    name = Column(String(1024), nullable=False)
    language = Column(String(50), nullable=False)
    content = Column(Text, nullable=False)
    size = Column(Integer, default=0)
    user_id = Column(String(64), index=True)
    session_id = Column(String(64), index=True)  # null until claimed by a session
    dependencies = Column(JSON, default=list)
    exports = Column(JSON, default=list)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Relationships
    fragments = relationship(
        "FragmentRow",
        back_populates="file",
        cascade="all, delete-orphan",
        order_by="FragmentRow.position",
    )


class FragmentRow(Base):
    """One chunk of a source file and its optional embedding."""

    __tablename__ = "fragments"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    file_id = Column(String(64), ForeignKey("source_files.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    fragment_id = Column(String(64), nullable=False)
    text = Column(Text, nullable=False)
    start_line = Column(Integer, nullable=False)
    end_line = Column(Integer, nullable=False)
    kind = Column(String(20), nullable=False, default="other")
    embedding = Column(JSON)

    # Relationships
    file = relationship("SourceFileRow", back_populates="fragments")
