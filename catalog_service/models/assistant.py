"""
Structured responses returned by the generative assistant.
"""

from typing import List

from pydantic import BaseModel, Field, model_validator


class QuizQuestion(BaseModel):
    """Single multiple-choice question about an article."""
    question: str
    options: List[str] = Field(min_length=2)
    correct_answer_index: int = Field(ge=0)
    explanation: str = ""

    @model_validator(mode="after")
    def _answer_in_range(self) -> "QuizQuestion":
        if self.correct_answer_index >= len(self.options):
            raise ValueError("correct_answer_index is out of range for the options")
        return self


class SearchResponse(BaseModel):
    """Article ids ordered by relevance."""
    relevant_article_ids: List[str] = Field(default_factory=list)


class ChatReply(BaseModel):
    """Assistant chat answer with optional article suggestions."""
    text: str
    recommended_article_ids: List[str] = Field(default_factory=list)
