from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class AcademicSessionBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    start_date: date
    end_date: date

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must not be blank")
        return name

    @model_validator(mode="after")
    def validate_date_order(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class AcademicSessionCreate(AcademicSessionBase):
    is_active: bool = False


class AcademicSession(AcademicSessionBase):
    model_config = ConfigDict(frozen=True)

    id: str
    is_active: bool = False
