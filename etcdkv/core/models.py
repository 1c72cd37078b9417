"""
Core domain models for etcdkv.

This module defines the endpoint configuration and the uniform
result type using Pydantic v2 for type safety and validation.
"""

from typing import Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

class Endpoint(BaseModel):
    """저장소 엔드포인트 (프로세스 수명 동안 불변)"""
    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    prefix: str = Field(default="keys", min_length=1)

class Success(BaseModel):
    """성공 결과 모델"""
    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    value: Optional[str] = None
    index: Optional[int] = None

class Failure(BaseModel):
    """실패 결과 모델"""
    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    error_code: Optional[int] = None
    message: str

    def __str__(self) -> str:
        if self.error_code is None:
            return self.message
        return f"{self.error_code}:{self.message}"

# 모든 연산이 반환하는 결과 타입
StoreResult = Union[Success, Failure]
