# app/models.py
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Table,
    Text,
    Time,
    func,
)
from sqlalchemy.orm import relationship

from app.db import Base


faculty_skills = Table(
    "faculty_skills",
    Base.metadata,
    Column("faculty_id", Integer, ForeignKey("faculty.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Integer, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)

batch_students = Table(
    "batch_students",
    Base.metadata,
    Column("batch_id", Integer, ForeignKey("batches.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", Integer, ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
)


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    category = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    faculty = relationship("Faculty", secondary=faculty_skills, back_populates="skills")
    batches = relationship("Batch", back_populates="skill")


class Faculty(Base):
    __tablename__ = "faculty"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=False, unique=True)
    phone_number = Column(String(50), nullable=True)
    employment_type = Column(String(20), nullable=True)  # full-time | part-time | contract
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    skills = relationship(
        "Skill",
        secondary=faculty_skills,
        back_populates="faculty",
        order_by="Skill.name",
    )
    availability = relationship(
        "FacultyAvailability",
        back_populates="faculty",
        cascade="all, delete-orphan",
        order_by="FacultyAvailability.id",
    )
    batches = relationship("Batch", back_populates="faculty")


class FacultyAvailability(Base):
    __tablename__ = "faculty_availability"

    id = Column(Integer, primary_key=True, index=True)
    faculty_id = Column(Integer, ForeignKey("faculty.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(String(10), nullable=False)  # Sunday ... Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    faculty = relationship("Faculty", back_populates="availability")


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    admission_number = Column(String(50), nullable=True, unique=True)
    phone_number = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    batches = relationship("Batch", secondary=batch_students, back_populates="students")


class Batch(Base):
    __tablename__ = "batches"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    days_of_week = Column(JSON, nullable=False, default=list)  # ["Monday", "Wednesday", ...]
    faculty_id = Column(Integer, ForeignKey("faculty.id", ondelete="SET NULL"), nullable=True, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="SET NULL"), nullable=True)
    max_students = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False, default="Upcoming")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    faculty = relationship("Faculty", back_populates="batches")
    skill = relationship("Skill", back_populates="batches")
    students = relationship(
        "Student",
        secondary=batch_students,
        back_populates="batches",
        order_by="Student.name",
    )


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    action = Column(String(50), nullable=False)
    item = Column(String(300), nullable=False)
    user = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False, default="system")
    created_at = Column(DateTime, server_default=func.now(), index=True)
