# etcdkv/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

from etcdkv.core.models import Endpoint

class EtcdConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 4001
    prefix: str = "keys"
    timeout_sec: float | None = 5.0     # None이면 타임아웃 없음
    quote_values: bool = False          # True면 키/값 퍼센트 인코딩

    def endpoint(self) -> Endpoint:
        """불변 Endpoint로 변환 (잘못된 host/port면 ValidationError)"""
        return Endpoint(host=self.host, port=self.port, prefix=self.prefix)

class Observability(BaseModel):
    service_name: str = "etcdkv"
    log_level: str = "INFO"
    metrics_enabled: bool = True

class Settings(BaseModel):
    # 하위 섹션 (기본값/팩토리로 누락 방지)
    etcd: EtcdConfig = Field(default_factory=EtcdConfig)
    observability: Observability = Field(default_factory=Observability)
