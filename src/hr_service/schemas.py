import datetime as dt
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class LoginRequest(BaseModel):
    # null и отсутствующее поле трактуются как ""
    username: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    success: bool
    message: str | None = None


class EmployeeCreateRequest(BaseModel):
    # пустые значения проверяются в обработчике (400), а не валидацией pydantic (422)
    name: str | None = None
    department: str | None = None
    email: str | None = None


class EmployeeOut(CamelModel):
    id: int
    employee_id: str
    name: str
    department: str
    email: str | None = None
    created_at: dt.datetime


class UploadResponse(CamelModel):
    id: int
    file_name: str
    uploaded_at: dt.datetime
