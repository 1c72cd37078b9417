"""
etcd v1 HTTP API client for etcdkv.

This module provides a blocking client for the four store operations:
set, get, delete and test-and-set. Every operation returns a StoreResult;
transport and decoding problems never escape as exceptions.
"""

import time
from typing import Optional

from etcdkv.adapters.etcd.transport import HttpTransport, TransportError
from etcdkv.core.decoder import decode
from etcdkv.core.models import Endpoint, Failure, StoreResult
from etcdkv.core.urls import build_form_body, build_url
from etcdkv.observability import metrics
from etcdkv.observability.logging_setup import get_logger
from etcdkv.settings import Settings

log = get_logger("etcdkv.client")

INVALID_KEY = "invalid key"
INVALID_VALUE = "invalid value"
INVALID_TTL = "invalid ttl"

def _is_valid(text: Optional[str]) -> bool:
    return isinstance(text, str) and len(text) > 0

def _is_valid_key(key: Optional[str]) -> bool:
    # "/" 하나만 있는 키는 디렉터리 경로가 됨
    return _is_valid(key) and key != "/"

def _is_valid_ttl(ttl: int) -> bool:
    return isinstance(ttl, int) and not isinstance(ttl, bool) and ttl >= 0

class EtcdClient:
    """etcd 키-값 저장소 클라이언트"""

    def __init__(self,
                 endpoint: Endpoint,
                 timeout: Optional[float] = 5.0,
                 quote_values: bool = False,
                 metrics_enabled: bool = True,
                 transport: Optional[HttpTransport] = None):
        """
        초기화합니다.

        Args:
            endpoint: 저장소 엔드포인트 (불변)
            timeout: 요청 타임아웃 (초), None이면 무제한
            quote_values: 키/값을 퍼센트 인코딩할지 여부
            metrics_enabled: Prometheus 메트릭 기록 여부
            transport: 사용할 HTTP 전송 (없으면 새로 생성)
        """
        self.endpoint = endpoint
        self.quote_values = quote_values
        self.metrics_enabled = metrics_enabled
        self.transport = transport or HttpTransport(timeout=timeout)

        log.info(f"etcd 클라이언트 초기화됨 host:{endpoint.host} port:{endpoint.port}")

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[HttpTransport] = None) -> "EtcdClient":
        """설정에서 클라이언트를 생성합니다. 잘못된 host/port면 ValidationError."""
        return cls(
            endpoint=settings.etcd.endpoint(),
            timeout=settings.etcd.timeout_sec,
            quote_values=settings.etcd.quote_values,
            metrics_enabled=settings.observability.metrics_enabled,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.transport.close()

    def _reject(self, operation: str, message: str) -> Failure:
        log.debug(f"입력 검증 실패 operation:{operation} reason:{message}")
        if self.metrics_enabled:
            metrics.validation_errors.labels(operation=operation).inc()
        return Failure(message=message)

    def _request(self, operation: str, method: str, key: str, body: Optional[str] = None) -> StoreResult:
        """
        요청 한 번을 수행하고 응답을 StoreResult로 변환합니다.

        Args:
            operation: 메트릭/로그용 연산 이름
            method: HTTP 메서드
            key: 대상 키
            body: 폼 본문

        Returns:
            디코딩된 결과 또는 전송 실패
        """
        url = build_url(self.endpoint, key, quote=self.quote_values)
        started = time.perf_counter()

        try:
            response = self.transport.perform(method, url, body)
            result = decode(response.body)
        except TransportError as e:
            result = Failure(message=str(e))

        if self.metrics_enabled:
            metrics.request_seconds.labels(operation=operation).observe(time.perf_counter() - started)
            outcome = "success" if result.ok else "failure"
            metrics.requests_total.labels(operation=operation, outcome=outcome).inc()

        if result.ok:
            log.debug(f"요청 성공 operation:{operation} key:{key} index:{result.index}")
        else:
            log.warning(f"요청 실패 operation:{operation} key:{key} error:{result}")
        return result

    def set(self, key: str, value: str, ttl: int = 0) -> StoreResult:
        """
        키에 값을 저장합니다.

        Args:
            key: 비어 있지 않은 키
            value: 비어 있지 않은 값
            ttl: 만료 시간 (초), 0이면 만료 없음

        Returns:
            저장 결과
        """
        if not _is_valid_key(key):
            return self._reject("set", INVALID_KEY)
        if not _is_valid(value):
            return self._reject("set", INVALID_VALUE)
        if not _is_valid_ttl(ttl):
            return self._reject("set", INVALID_TTL)

        body = build_form_body(value, ttl=ttl, quote=self.quote_values)
        return self._request("set", "POST", key, body)

    def get(self, key: str) -> Optional[StoreResult]:
        """
        키의 현재 값을 가져옵니다.

        Returns:
            값과 index를 담은 결과, 키가 유효하지 않으면 None
        """
        if not _is_valid_key(key):
            self._reject("get", INVALID_KEY)
            return None
        return self._request("get", "GET", key)

    def delete(self, key: str) -> StoreResult:
        """키를 삭제합니다. 성공 시 value에는 삭제된 키가 담깁니다."""
        if not _is_valid_key(key):
            return self._reject("delete", INVALID_KEY)
        return self._request("delete", "DELETE", key)

    def test_and_set(self, key: str, value: str, old_value: Optional[str], ttl: int = 0) -> StoreResult:
        """
        현재 값이 old_value와 같을 때만 원자적으로 value로 교체합니다.

        old_value가 None이면 set()과 동일하게 동작합니다.
        빈 문자열 old_value는 유효하지 않은 값으로 거부됩니다.

        Args:
            key: 비어 있지 않은 키
            value: 새 값
            old_value: 비교할 이전 값
            ttl: 만료 시간 (초)

        Returns:
            교체 결과, 값이 다르면 서버의 errorCode를 담은 Failure
        """
        if not _is_valid_key(key):
            return self._reject("test_and_set", INVALID_KEY)
        if not _is_valid(value):
            return self._reject("test_and_set", INVALID_VALUE)
        if old_value is None:
            return self.set(key, value, ttl)
        if not _is_valid(old_value):
            return self._reject("test_and_set", INVALID_VALUE)
        if not _is_valid_ttl(ttl):
            return self._reject("test_and_set", INVALID_TTL)

        body = build_form_body(value, ttl=ttl, prev_value=old_value, quote=self.quote_values)
        return self._request("test_and_set", "POST", key, body)
