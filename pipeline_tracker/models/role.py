import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from pipeline_tracker.core.database import Base
from pipeline_tracker.models.organization import utcnow


class Role(Base):
    """
    A job opening candidates are considered for.

    Reference data only: roles have no lifecycle of their own.
    """
    __tablename__ = "roles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    role_name = Column(String, nullable=False, index=True)
    department = Column(String, nullable=True)
    seniority = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    # Relationships
    organization = relationship("Organization", back_populates="roles")
    candidates = relationship("Candidate", back_populates="role")

    def __repr__(self):
        return f"<Role(id={self.id}, role_name='{self.role_name}')>"
