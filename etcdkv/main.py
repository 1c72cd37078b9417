# etcdkv/main.py
import os
import sys
import argparse
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError

from etcdkv.adapters.etcd.client import EtcdClient
from etcdkv.core.models import StoreResult
from etcdkv.observability.logging_setup import setup_logging_dev, get_logger
from etcdkv.ports.kvstore import KVStorePort
from etcdkv.settings import EtcdConfig, Settings

log = get_logger("etcdkv.main")

SMOKE_KEY = "/key1"
SMOKE_VALUE = "value1"
SMOKE_NEW_VALUE = "value2"

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()

    # ETCD (문자열 그대로 넘겨 pydantic이 변환/검증)
    timeout = os.getenv("ETCD_TIMEOUT_SEC", s.etcd.timeout_sec)
    s.etcd = EtcdConfig(
        host=os.getenv("ETCD_HOST", s.etcd.host),
        port=os.getenv("ETCD_PORT", s.etcd.port),
        prefix=os.getenv("ETCD_PREFIX", s.etcd.prefix),
        timeout_sec=timeout if timeout != "" else None,
        quote_values=_b("ETCD_QUOTE_VALUES", s.etcd.quote_values),
    )

    # 관측성
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)

    return s

def parse_host_port(text: str) -> Tuple[str, int]:
    """'host:port' 문자열을 분리합니다."""
    host, sep, port = text.rpartition(":")
    if not sep or not host:
        raise argparse.ArgumentTypeError(f"expected host:port, got {text!r}")
    try:
        return host, int(port)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port in {text!r}")

def _expect(name: str, result: Optional[StoreResult], check: Callable[[Optional[StoreResult]], bool]) -> bool:
    if check(result):
        log.info(f"스모크 단계 통과 step:{name}")
        return True
    log.error(f"스모크 단계 실패 step:{name} result:{result!r}")
    return False

def run_smoke_test(store: KVStorePort) -> bool:
    """
    고정된 스모크 테스트 시퀀스를 실행합니다.

    set → get → delete → get → set(ttl) → test_and_set 두 번

    Returns:
        모든 단계 통과 여부
    """
    steps: List[Tuple[str, Callable[[], Optional[StoreResult]], Callable[[Optional[StoreResult]], bool]]] = [
        ("set", lambda: store.set(SMOKE_KEY, SMOKE_VALUE, 0),
         lambda r: r.ok),
        ("get", lambda: store.get(SMOKE_KEY),
         lambda r: r is not None and r.ok and r.value == SMOKE_VALUE),
        ("delete", lambda: store.delete(SMOKE_KEY),
         lambda r: r.ok),
        ("get_deleted", lambda: store.get(SMOKE_KEY),
         lambda r: r is not None and not r.ok),
        ("set_ttl", lambda: store.set(SMOKE_KEY, SMOKE_VALUE, 5),
         lambda r: r.ok),
        ("test_and_set", lambda: store.test_and_set(SMOKE_KEY, SMOKE_NEW_VALUE, SMOKE_VALUE, 0),
         lambda r: r.ok),
        ("test_and_set_stale", lambda: store.test_and_set(SMOKE_KEY, SMOKE_NEW_VALUE, SMOKE_VALUE, 0),
         lambda r: not r.ok),
    ]

    for name, call, check in steps:
        if not _expect(name, call(), check):
            return False
    return True

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="etcd 클라이언트 스모크 테스트")
    parser.add_argument(
        "address",
        nargs="?",
        type=parse_host_port,
        help="대상 서버 host:port (기본값: ETCD_HOST/ETCD_PORT 또는 127.0.0.1:4001)"
    )
    args = parser.parse_args(argv)

    try:
        settings = build_settings()
    except ValidationError as e:
        log.error(f"잘못된 환경 변수 설정 error:{e}")
        return 2
    if args.address:
        settings.etcd.host, settings.etcd.port = args.address

    setup_logging_dev(settings.observability.log_level)

    try:
        client = EtcdClient.from_settings(settings)
    except ValidationError as e:
        log.error(f"잘못된 엔드포인트 설정 error:{e}")
        return 2

    log.info(f"스모크 테스트 시작 service:{settings.observability.service_name} host:{settings.etcd.host} port:{settings.etcd.port}")
    with client:
        ok = run_smoke_test(client)

    if ok:
        log.info("모든 스모크 단계가 성공적으로 완료되었습니다")
        return 0
    return 1

if __name__ == "__main__":
    sys.exit(main())
