# src/kukey_core/models/course.py
"""Course catalog models."""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kukey_core.db.session import Base
from kukey_core.db.types import IdType


class Course(Base):
    """Immutable catalog entry for one offered course section."""

    __tablename__ = "course"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    course_code: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    course_name: Mapped[str] = mapped_column(Text, nullable=False)
    professor_name: Mapped[str] = mapped_column(Text, nullable=False)
    credit: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    year: Mapped[str] = mapped_column(Text, nullable=False)
    semester: Mapped[str] = mapped_column(Text, nullable=False)

    details: Mapped[list["CourseDetail"]] = relationship(
        "CourseDetail",
        back_populates="course",
        cascade="all, delete-orphan",
    )


class CourseDetail(Base):
    """One weekly meeting of a course: a day and a period range such as "1-3"."""

    __tablename__ = "course_detail"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    course_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("course.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day: Mapped[str] = mapped_column(Text, nullable=False)
    # Catalog notation kept verbatim; parsed by the conflict checker.
    period: Mapped[str] = mapped_column(Text, nullable=False)
    classroom: Mapped[str | None] = mapped_column(Text, nullable=True)

    course: Mapped[Course] = relationship("Course", back_populates="details")
