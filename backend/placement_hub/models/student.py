from sqlalchemy import Column, Integer, String, DateTime, Boolean, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
import enum


class StudentRole(str, enum.Enum):
    STUDENT = "student"
    COORDINATOR = "coordinator"


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(
        SQLEnum(StudentRole, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=StudentRole.STUDENT,
    )

    # Academic details
    roll_no = Column(String(50), nullable=True)
    semester = Column(String(20), nullable=True)
    course = Column(String(200), nullable=True)
    graduation_year = Column(Integer, nullable=True)

    default_resume = Column(String(500), nullable=True)
    profile_is_completed = Column(Boolean, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    applications = relationship("Application", back_populates="student")
