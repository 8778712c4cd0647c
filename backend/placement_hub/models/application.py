from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class Application(Base):
    """A student's application to a company, with the resume they submitted."""
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    # Cloudinary delivery URL of the uploaded resume
    resume = Column(String(1000), nullable=True)
    applied_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="applications")
    company = relationship("Company", back_populates="applications")
