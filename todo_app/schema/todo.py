from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional


def _check_not_blank(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError("text must not be blank")
    return v


# 创建 Todo 时的输入，completed 一律由服务端置为 False
class TodoCreate(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v):
        return _check_not_blank(v)


# 局部更新：未提供（或为 null）的字段保持原值
class TodoUpdate(BaseModel):
    text: Optional[str] = None
    completed: Optional[bool] = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v):
        return _check_not_blank(v)

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


# 返回给前端的 Todo 结构
class TodoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    completed: bool


class TodoCount(BaseModel):
    amount: int


class TodoDeleted(BaseModel):
    message: str
