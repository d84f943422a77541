"""
Daily quiz bank.

Three pre-authored items served in static mode and used as the fallback
whenever a generated quiz cannot be used.

Item fields (wire format):
  type : "mcq" | "image_mcq"
  img  : image URL, image_mcq only
  q    : the question text
  opts : exactly three answer strings
  a    : 0-based index of the correct answer
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

OPTION_COUNT = 3


class QuizItem(BaseModel):
    """One multiple-choice question; unknown keys from generated JSON are dropped."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "type": "mcq",
                "q": "Bullish RSI divergence means…",
                "opts": ["Price LL, RSI HL", "Price HL, RSI LL", "Price HH, RSI HH"],
                "a": 0,
            }
        },
    )

    type: Literal["mcq", "image_mcq"]
    q: str = Field(min_length=1)
    opts: List[str] = Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    a: int = Field(ge=0, le=OPTION_COUNT - 1, strict=True)
    img: Optional[str] = None

    @field_validator("opts")
    @classmethod
    def _options_not_blank(cls, opts: List[str]) -> List[str]:
        if any(not str(o).strip() for o in opts):
            raise ValueError("quiz options must be non-empty")
        return opts

    @model_validator(mode="after")
    def _image_matches_type(self) -> "QuizItem":
        if self.type == "image_mcq" and not (self.img and self.img.strip()):
            raise ValueError("image_mcq requires img")
        if self.type == "mcq":
            self.img = None
        return self

    def to_wire(self) -> dict:
        return self.model_dump(exclude_none=True)


QUIZ_BANK: List[QuizItem] = [
    QuizItem(
        type="image_mcq",
        img="https://i.imgur.com/0Z9z9zG.png",
        q="Which candle shows a bullish engulfing?",
        opts=["A", "B", "C"],
        a=1,
    ),
    QuizItem(
        type="mcq",
        q="A valid 1H order block is usually confirmed after…",
        opts=["a gap down", "mitigation + retest + BOS", "RSI > 60"],
        a=1,
    ),
    QuizItem(
        type="mcq",
        q="Bullish RSI divergence means…",
        opts=["Price LL, RSI HL", "Price HL, RSI LL", "Price HH, RSI HH"],
        a=0,
    ),
]
