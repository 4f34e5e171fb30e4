"""Would You Rather question model — two options and their vote tallies."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, false, func, text
from sqlalchemy.orm import Mapped, mapped_column

from wyr.database import Base

OPTION_TEXT_MAX_LENGTH = 500


class Question(Base):
    __tablename__ = "WouldYouRatherQuestions"
    __table_args__ = (
        CheckConstraint(
            'lower(trim("optionA_text")) <> lower(trim("optionB_text"))',
            name="ck_wyr_options_distinct",
        ),
        CheckConstraint('"optionA_votes" >= 0', name="ck_wyr_optionA_votes_nonneg"),
        CheckConstraint('"optionB_votes" >= 0', name="ck_wyr_optionB_votes_nonneg"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # ── Options ──
    option_a_text: Mapped[str] = mapped_column(
        "optionA_text", String(OPTION_TEXT_MAX_LENGTH), nullable=False
    )
    option_b_text: Mapped[str] = mapped_column(
        "optionB_text", String(OPTION_TEXT_MAX_LENGTH), nullable=False
    )

    # ── Tallies (only ever incremented) ──
    option_a_votes: Mapped[int] = mapped_column(
        "optionA_votes", Integer, nullable=False, default=0, server_default=text("0")
    )
    option_b_votes: Mapped[int] = mapped_column(
        "optionB_votes", Integer, nullable=False, default=0, server_default=text("0")
    )

    # ── Moderation (one-way: false -> true) ──
    is_flagged: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false(), index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Question id={self.id} flagged={self.is_flagged}>"
