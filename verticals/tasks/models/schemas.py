"""Pydantic schemas for API request/response documentation.

Task fields are typed as Any: the service stores whatever the client sends,
so these models document the expected shape without rejecting payloads.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class TaskCreate(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "required": ["title", "description", "due_date", "priority"],
            "examples": [
                {
                    "title": "Finish Homework",
                    "description": "Complete the math assignment",
                    "due_date": "2025-04-20",
                    "priority": "high",
                }
            ],
        },
    )

    title: Any = Field(None, json_schema_extra={"type": "string"})
    description: Any = Field(None, json_schema_extra={"type": "string"})
    due_date: Any = Field(None, json_schema_extra={"type": "string", "format": "date"})
    priority: Any = Field(None, json_schema_extra={"type": "string"})


class PriorityUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    priority: Any = Field(None, json_schema_extra={"type": "string"})


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class TaskResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    title: str
    description: str
    due_date: str = Field(..., json_schema_extra={"format": "date"})
    completed: bool
    priority: str


class ErrorMessage(BaseModel):
    message: str = Field(..., examples=["Task not found"])
