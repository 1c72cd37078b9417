"""
Key-value store port interface.

This module defines the protocol for a blocking key-value store client.
"""

from typing import Protocol, Optional

from etcdkv.core.models import StoreResult

class KVStorePort(Protocol):
    """키-값 저장소 포트 인터페이스"""

    def set(self, key: str, value: str, ttl: int = 0) -> StoreResult:
        """
        키-값을 저장합니다.

        Args:
            key: 저장할 키
            value: 저장할 값
            ttl: TTL (초), 0이면 만료 없음
        """
        ...

    def get(self, key: str) -> Optional[StoreResult]:
        """
        키로 값을 조회합니다.

        Args:
            key: 조회할 키

        Returns:
            결과, 키가 유효하지 않으면 None
        """
        ...

    def delete(self, key: str) -> StoreResult:
        """
        키를 삭제합니다.

        Args:
            key: 삭제할 키
        """
        ...

    def test_and_set(self, key: str, value: str, old_value: Optional[str], ttl: int = 0) -> StoreResult:
        """
        현재 값이 old_value와 같을 때만 value로 교체합니다.

        Args:
            key: 대상 키
            value: 새 값
            old_value: 비교할 이전 값, None이면 set과 동일
            ttl: TTL (초)
        """
        ...
