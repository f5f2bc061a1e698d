from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

QuestionType = Literal["single_select", "multi_select", "range", "brand_select", "text_input"]


class QuestionOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    value: str


class BudgetPreset(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    min: float
    max: float


class RangeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    step: float
    currency: str
    presets: tuple[BudgetPreset, ...] = ()


class Question(BaseModel):
    """Single step of a subcategory's question flow"""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    type: QuestionType
    required: bool = True
    options: tuple[QuestionOption, ...] = ()
    range_config: RangeConfig | None = None


class Subcategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    icon: str
    category_id: str
    questions: tuple[Question, ...] = Field(default=(), description="Ordered question flow")


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    icon: str
    description: str
    subcategories: tuple[Subcategory, ...] = ()


class SubcategoryQuestionsResponse(BaseModel):
    """Response model for a subcategory's question flow"""

    subcategory_id: str
    subcategory_name: str
    category_name: str
    questions: list[Question]
