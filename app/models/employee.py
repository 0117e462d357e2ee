"""ORM model for staff records linked to user accounts."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String

from app.models.base import Base

JOB_DESCRIPTIONS = ("receptionist", "office-boy", "security", "customer-service", "owner")


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    salary = Column(Float, nullable=False)
    jobdesc = Column(String(64), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
