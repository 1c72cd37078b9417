"""
Blocking HTTP transport for the etcd client.

One request per call, no retries. Only the success and bad-request
status codes are handed back for decoding; everything else, and every
requests-level error, is raised as TransportError.
"""

from dataclasses import dataclass
from typing import Optional

import requests

from etcdkv.observability.logging_setup import get_logger

log = get_logger("etcdkv.transport")

HTTP_SUCCESS = 200
HTTP_BAD_REQ = 400
ACCEPTED_STATUSES = (HTTP_SUCCESS, HTTP_BAD_REQ)

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}

class TransportError(Exception):
    """요청이 완료되지 못했거나 허용되지 않은 상태 코드"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status

@dataclass
class HttpResponse:
    status: int
    body: bytes

class HttpTransport:
    """requests.Session 기반 동기 HTTP 전송"""

    def __init__(self, timeout: Optional[float] = 5.0, session: Optional[requests.Session] = None):
        """
        초기화합니다.

        Args:
            timeout: 요청 타임아웃 (초), None이면 무제한
            session: 재사용할 세션 (없으면 새로 생성)
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.session.close()

    def perform(self, method: str, url: str, body: Optional[str] = None) -> HttpResponse:
        """
        요청을 한 번 수행합니다.

        Args:
            method: HTTP 메서드 (GET, POST, DELETE)
            url: 요청 URL
            body: 폼 본문 (POST일 때)

        Returns:
            상태 코드와 본문

        Raises:
            TransportError: 연결 실패, 타임아웃, 허용되지 않은 상태 코드
        """
        kwargs = {"timeout": self.timeout}
        if body is not None:
            kwargs["data"] = body.encode("utf-8")
            kwargs["headers"] = FORM_HEADERS

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            log.debug(f"요청 실패 method:{method} url:{url} error:{e}")
            raise TransportError(f"request to {url} failed: {e}") from e

        if response.status_code not in ACCEPTED_STATUSES:
            raise TransportError(
                f"server responded with status code: {response.status_code}",
                status=response.status_code,
            )

        return HttpResponse(status=response.status_code, body=response.content)
