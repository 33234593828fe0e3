from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

# Bucket field names in scan order: high, medium, low
BUCKETS = ("high_priority", "medium_priority", "low_priority")

class TaskSet(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    high_priority: list[str] = Field(default_factory=list, alias="highPriority")
    medium_priority: list[str] = Field(default_factory=list, alias="mediumPriority")
    low_priority: list[str] = Field(default_factory=list, alias="lowPriority")

class BoardState(BaseModel):
    tasks: TaskSet
    error: str = ""
    is_loading: bool = False

class PromptRequest(BaseModel):
    prompt: str = Field(min_length=1)

class PrioritizeRequest(BaseModel):
    tasks: str = Field(min_length=1)  # raw user input, one task per line

class ReorderRequest(BaseModel):
    active_id: str
    over_id: Optional[str] = None  # None when dropped outside any item
