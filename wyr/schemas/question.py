"""Question Pydantic schemas — submission input and API payloads."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class QuestionSubmit(BaseModel):
    """Body of ``POST /api/wyr/submit``. Values are validated by the poll core."""
    model_config = ConfigDict(populate_by_name=True)

    option_a: Optional[Any] = Field(default=None, alias="optionA")
    option_b: Optional[Any] = Field(default=None, alias="optionB")


class QuestionOut(BaseModel):
    """A question as shown to voters."""
    id: int
    optionA_text: str
    optionB_text: str
    optionA_votes: int
    optionB_votes: int
    optionA_percentage: int
    optionB_percentage: int


class Percentages(BaseModel):
    optionA: int
    optionB: int


class VoteOut(BaseModel):
    message: str = "Vote recorded successfully"
    questionId: int
    optionAVotes: int
    optionBVotes: int
    percentages: Percentages


class SubmittedQuestion(BaseModel):
    id: int
    optionA_text: str
    optionB_text: str


class SubmittedQuestionOut(BaseModel):
    message: str = "Question submitted."
    question: SubmittedQuestion


class FlagOut(BaseModel):
    message: str = "Question flagged."
    questionId: int


class ErrorOut(BaseModel):
    error: str
