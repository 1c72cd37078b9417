"""
URL and form body composition for the store's v1 HTTP API.

Keys and values are concatenated as-is unless quoting is requested,
which keeps the request bytes identical to the reference client.
"""

from typing import Optional
from urllib.parse import quote as _quote

from etcdkv.core.models import Endpoint

URL_FORMAT = "http://{host}:{port}/v1/{prefix}/{key}"

def _maybe_quote(text: str, quote: bool) -> str:
    return _quote(text, safe="") if quote else text

def build_url(endpoint: Endpoint, key: str, prefix: Optional[str] = None, quote: bool = False) -> str:
    """
    키에 대한 엔드포인트 URL을 만듭니다.

    Args:
        endpoint: 저장소 엔드포인트
        key: 키 (앞의 '/' 하나는 제거됨)
        prefix: 경로 접두사, None이면 endpoint.prefix ("keys")
        quote: 키를 퍼센트 인코딩할지 여부

    Returns:
        http://{host}:{port}/v1/{prefix}/{key}
    """
    if key.startswith("/"):
        key = key[1:]
    return URL_FORMAT.format(
        host=endpoint.host,
        port=endpoint.port,
        prefix=prefix or endpoint.prefix,
        key=_maybe_quote(key, quote),
    )

def build_form_body(value: str, ttl: int = 0, prev_value: Optional[str] = None, quote: bool = False) -> str:
    """
    쓰기 요청의 폼 본문을 만듭니다.

    value={value}[&prevValue={prev_value}][&ttl={ttl}]
    """
    body = f"value={_maybe_quote(value, quote)}"
    if prev_value is not None:
        body += f"&prevValue={_maybe_quote(prev_value, quote)}"
    if ttl > 0:
        body += f"&ttl={ttl}"
    return body
