"""
Fire Survey Backend: SurveyResult SQLAlchemy Model
==================================================

What:  ORM model representing the `survey_results` table.
Who:   Written by SurveyService, read by AlertService; the whole table ships
       with the database file from GET /downloadAccess.

Table Design:
    - Integer auto-increment primary key: insertion order, used by the alert
      lookup (ORDER BY id DESC).
    - email UNIQUE: the constraint itself rejects duplicate submissions, so
      there is no separate existence query.
    - level: derived from score when the row is inserted; never recomputed.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from firesurvey.database import Base


class SurveyResult(Base):
    """
    One persisted survey submission.

    Lifecycle:
        Created once by POST /submitSurvey. Never updated or deleted.
    """

    __tablename__ = "survey_results"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    address: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    score: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    # "high security level" | "medium security level" | "low security level"
    level: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<SurveyResult(id={self.id}, email='{self.email}', "
            f"score={self.score}, level='{self.level}')>"
        )
