from sqlalchemy import Column, String, DateTime, Boolean, Integer, Float, Text, LargeBinary, ForeignKey, Table
from sqlalchemy.orm import relationship

from medplanner.core.models import ExamType, HolidayType, ProfessorTitle, utc_now
from .database import Base

# ==========================================
# SQLAlchemy Models (planner tables)
# ==========================================
# Every primary key is a UUID string assigned on creation and kept across backups

professor_disciplines = Table(
    "professor_disciplines",
    Base.metadata,
    Column("professor_id", String(36), ForeignKey("professors.id", ondelete="CASCADE"), primary_key=True),
    Column("discipline_id", String(36), ForeignKey("disciplines.id", ondelete="CASCADE"), primary_key=True),
)

class Semester(Base):
    __tablename__ = 'semesters'

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False, default=False)

    # Deleting a semester only detaches its disciplines
    disciplines = relationship("Discipline", back_populates="semester")

    def __repr__(self):
        return f"<Semester(id={self.id}, name={self.name})>"

class Discipline(Base):
    """Course of a semester; owns its tasks, exams, absences, notes and evaluations"""
    __tablename__ = 'disciplines'

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    code = Column(String, nullable=False)
    instructor = Column(String, nullable=True)
    color_hex = Column(String, nullable=False, default="#1B3FE8")
    total_hours = Column(Integer, nullable=True)
    absence_limit = Column(Float, nullable=True)
    semester_id = Column(String(36), ForeignKey("semesters.id", ondelete="SET NULL"), nullable=True, index=True)

    semester = relationship("Semester", back_populates="disciplines")
    tasks = relationship("Task", back_populates="discipline", cascade="all, delete-orphan")
    exams = relationship("Exam", back_populates="discipline", cascade="all, delete-orphan")
    absences = relationship("Absence", back_populates="discipline", cascade="all, delete-orphan")
    notes = relationship("Note", back_populates="discipline", cascade="all, delete-orphan")
    evaluations = relationship("Evaluation", back_populates="discipline", cascade="all, delete-orphan")
    professors = relationship("Professor", secondary=professor_disciplines, back_populates="disciplines")

    def __repr__(self):
        return f"<Discipline(id={self.id}, code={self.code}, name={self.name})>"

class Task(Base):
    __tablename__ = 'tasks'

    id = Column(String(36), primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    due_date = Column(DateTime(timezone=True), nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    discipline_id = Column(String(36), ForeignKey("disciplines.id", ondelete="CASCADE"), nullable=True, index=True)

    discipline = relationship("Discipline", back_populates="tasks")

class Exam(Base):
    __tablename__ = 'exams'

    id = Column(String(36), primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    exam_date = Column(DateTime(timezone=True), nullable=False)
    score = Column(Float, nullable=True)
    exam_type = Column(String, nullable=False, default=ExamType.THEORETICAL.value)
    discipline_id = Column(String(36), ForeignKey("disciplines.id", ondelete="CASCADE"), nullable=True, index=True)

    discipline = relationship("Discipline", back_populates="exams")

class Absence(Base):
    """Missed class hours on a given day"""
    __tablename__ = 'absences'

    id = Column(String(36), primary_key=True)
    date = Column(DateTime(timezone=True), nullable=False)
    hours = Column(Integer, nullable=False, default=1)
    remark = Column(Text, nullable=True)
    discipline_id = Column(String(36), ForeignKey("disciplines.id", ondelete="CASCADE"), nullable=True, index=True)

    discipline = relationship("Discipline", back_populates="absences")

class Note(Base):
    __tablename__ = 'notes'

    id = Column(String(36), primary_key=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    modified_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    discipline_id = Column(String(36), ForeignKey("disciplines.id", ondelete="CASCADE"), nullable=True, index=True)

    discipline = relationship("Discipline", back_populates="notes")

class Evaluation(Base):
    """Graded item; weight is used for the weighted average"""
    __tablename__ = 'evaluations'

    id = Column(String(36), primary_key=True)
    title = Column(String, nullable=False)
    score = Column(Float, nullable=False)
    weight = Column(Float, nullable=False, default=1.0)
    date = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    discipline_id = Column(String(36), ForeignKey("disciplines.id", ondelete="CASCADE"), nullable=True, index=True)

    discipline = relationship("Discipline", back_populates="evaluations")

class Professor(Base):
    __tablename__ = 'professors'

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    title = Column(String, nullable=False, default=ProfessorTitle.NONE.value)
    specialty = Column(String, nullable=False, default="")
    department = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    phone = Column(String, nullable=False, default="")
    whatsapp = Column(String, nullable=False, default="")
    office_hours = Column(String, nullable=False, default="")
    room = Column(String, nullable=False, default="")
    remarks = Column(Text, nullable=False, default="")
    photo = Column(LargeBinary, nullable=True)

    # Removing a professor only drops the association rows
    disciplines = relationship("Discipline", secondary=professor_disciplines, back_populates="professors")

    def __repr__(self):
        return f"<Professor(id={self.id}, name={self.name})>"

class Holiday(Base):
    __tablename__ = 'holidays'

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    holiday_type = Column(String, nullable=False, default=HolidayType.NATIONAL.value)
    is_recurring = Column(Boolean, nullable=False, default=False)
    blocks_classes = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<Holiday(id={self.id}, name={self.name}, date={self.date})>"
