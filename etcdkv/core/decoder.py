"""
Response decoding for the store's v1 HTTP API.

The store answers with one of three JSON object shapes:

    {"value": "...", "index": N}                      get/set success
    {"action": "DELETE", "key": "/k", "index": N}     delete confirmation
    {"errorCode": N, "message": "..."}                application error

decode() folds all of them into a StoreResult. It is a pure function;
no state is kept between calls.
"""

import json
from typing import Any, Optional, Union

from etcdkv.core.models import Failure, StoreResult, Success

NOT_AN_OBJECT = "response is not a json object"
INVALID_ERROR = "invalid error message"
INVALID_DELETE = "invalid delete response"

DELETE_ACTION = "DELETE"

def _is_int(value: Any) -> bool:
    # json의 true/false는 int의 서브클래스이므로 제외
    return isinstance(value, int) and not isinstance(value, bool)

def _read_index(payload: dict) -> Optional[int]:
    index = payload.get("index")
    return index if _is_int(index) else None

def _decode_delete(payload: dict) -> StoreResult:
    key = payload.get("key")
    if not isinstance(key, str):
        return Failure(message=INVALID_DELETE)
    if key.startswith("/"):
        key = key[1:]
    return Success(value=key)

def _decode_error(payload: dict) -> Failure:
    code = payload.get("errorCode")
    message = payload.get("message")
    if not _is_int(code) or not isinstance(message, str):
        return Failure(message=INVALID_ERROR)
    return Failure(error_code=code, message=message)

def decode(raw_body: Union[str, bytes, None]) -> StoreResult:
    """
    응답 본문을 StoreResult로 변환합니다.

    Args:
        raw_body: 서버가 돌려준 원본 본문

    Returns:
        Success 또는 Failure
    """
    try:
        payload = json.loads(raw_body)
    except (TypeError, ValueError, RecursionError):
        return Failure(message=NOT_AN_OBJECT)

    if not isinstance(payload, dict):
        return Failure(message=NOT_AN_OBJECT)

    value = payload.get("value")
    if isinstance(value, str):
        return Success(value=value, index=_read_index(payload))

    if payload.get("action") == DELETE_ACTION:
        return _decode_delete(payload)

    return _decode_error(payload)
