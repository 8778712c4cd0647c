from sqlalchemy import Column, Integer, String, Float, Enum as SQLEnum
from sqlalchemy.orm import relationship
from ..database import Base
import enum


class CompanyType(str, enum.Enum):
    REMOTE = "Remote"
    ONSITE = "onsite"
    HYBRID = "hybrid"


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(5000), nullable=False)
    type = Column(
        SQLEnum(CompanyType, values_callable=lambda types: [t.value for t in types]),
        nullable=True,
    )
    stipend = Column(Float, nullable=True)

    applications = relationship("Application", back_populates="company")
