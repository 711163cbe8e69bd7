"""
请求体校验 (pydantic)

字段同时接受 camelCase (前端) 和 snake_case。
只有名称类字段去掉首尾空白, 密码和私信内容按原样保存。
"""
from datetime import date
from typing import Annotated, Optional

from flask import request
from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from pintracker.errors import ValidationError


class RequestSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )


# 去掉首尾空白的字符串
Trimmed = Annotated[str, StringConstraints(strip_whitespace=True)]


class RegisterRequest(RequestSchema):
    username: Trimmed = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=128)
    display_name: Optional[Trimmed] = Field(default=None, max_length=100)
    email: Optional[Trimmed] = Field(default=None, max_length=120, pattern=r'^[^@\s]+@[^@\s]+$')
    avatar_url: Optional[Trimmed] = Field(default=None, max_length=500)


class LoginRequest(RequestSchema):
    username: Trimmed = Field(min_length=1)
    password: str = Field(min_length=1)


class PinCreate(RequestSchema):
    name: Trimmed = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    collection: Optional[Trimmed] = Field(default=None, max_length=200)
    image_url: Optional[Trimmed] = Field(default=None, max_length=500)
    category: Optional[Trimmed] = Field(default=None, max_length=100)
    release_date: Optional[date] = None
    is_limited_edition: bool = False
    current_value: Optional[float] = Field(default=None, ge=0)


class CollectionAdd(RequestSchema):
    pin_id: int = Field(gt=0)
    notes: Optional[str] = None
    for_trade: bool = False
    purchase_price: Optional[float] = Field(default=None, ge=0)
    purchase_date: Optional[date] = None


class CollectionUpdate(RequestSchema):
    notes: Optional[str] = None
    for_trade: Optional[bool] = None
    purchase_price: Optional[float] = Field(default=None, ge=0)
    purchase_date: Optional[date] = None


class WantListAdd(RequestSchema):
    pin_id: int = Field(gt=0)
    priority: int = Field(default=1, ge=1, le=5)
    max_price: Optional[float] = Field(default=None, ge=0)


class MessageCreate(RequestSchema):
    receiver_id: int = Field(gt=0)
    content: str = Field(min_length=1, max_length=5000)


class ListingImport(RequestSchema):
    """从 eBay 导入单个商品"""
    name: Trimmed = Field(min_length=1, max_length=200)
    image_url: Optional[Trimmed] = Field(default=None, max_length=500)
    price: Optional[float] = Field(default=None, ge=0)
    collection: Optional[Trimmed] = Field(default=None, max_length=200)
    category: Optional[Trimmed] = Field(default=None, max_length=100)
    description: Optional[str] = None


def field_errors(error: PydanticValidationError):
    """pydantic 错误 -> [{field, message}]"""
    return [
        {
            'field': '.'.join(str(part) for part in err['loc']) or 'body',
            'message': err['msg'],
        }
        for err in error.errors()
    ]


def parse_body(schema, data=None, partial=False):
    """
    校验请求 JSON

    Args:
        schema: RequestSchema 子类
        data: 要校验的数据, 默认取当前请求体
        partial: 返回值是否只包含请求中出现的字段

    Raises:
        ValidationError: 400, 附带字段级错误
    """
    if data is None:
        data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object',
                              errors=[{'field': 'body', 'message': 'Expected a JSON object'}])

    try:
        parsed = schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(errors=field_errors(e)) from e

    if partial:
        return parsed.model_dump(exclude_unset=True)
    return parsed
