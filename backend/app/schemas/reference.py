from pydantic import BaseModel, ConfigDict, Field, field_validator


class NamedRecordBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must not be blank")
        return name


class TeacherCreate(NamedRecordBase):
    pass


class Teacher(NamedRecordBase):
    model_config = ConfigDict(frozen=True)

    id: str


class SubjectCreate(NamedRecordBase):
    pass


class Subject(NamedRecordBase):
    model_config = ConfigDict(frozen=True)

    id: str


class ClassGradeCreate(NamedRecordBase):
    pass


class ClassGrade(NamedRecordBase):
    """A student cohort such as "Class 4"; not a room."""

    model_config = ConfigDict(frozen=True)

    id: str
