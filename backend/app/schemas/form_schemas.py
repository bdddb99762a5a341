# backend/app/schemas/form_schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional, Literal
from datetime import datetime

from backend.app.config.settings import DEFAULT_SUB_FIELD_MAX

FormStatus = Literal["Active", "Inactive"]


class SubFieldDefinition(BaseModel):
    name: str
    max_value: float = DEFAULT_SUB_FIELD_MAX


class FieldDefinition(BaseModel):
    name: str
    max_value: Optional[float] = None  # only read for simple fields
    sub_fields: List[SubFieldDefinition] = Field(default_factory=list)

    @property
    def is_composite(self) -> bool:
        return len(self.sub_fields) > 0

    @property
    def sub_field_max(self) -> float:
        """Declared maximum a single sub-metric may score."""
        declared = [sf.max_value for sf in self.sub_fields if sf.max_value is not None]
        return max(declared) if declared else DEFAULT_SUB_FIELD_MAX


class FormCreate(BaseModel):
    form_name: str
    tutor_id: int
    custom_fields: List[FieldDefinition] = []
    status: FormStatus = "Active"


class FormStatusUpdate(BaseModel):
    status: FormStatus


class FormRead(BaseModel):
    id: int
    form_name: str
    tutor_id: int
    standard_fields: List[FieldDefinition]
    custom_fields: List[FieldDefinition]
    status: FormStatus
    created_at: datetime
    updated_at: datetime
