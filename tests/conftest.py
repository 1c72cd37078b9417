"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
네트워크 없이 클라이언트를 구동하기 위해 etcd v1 API를 흉내 내는
requests 어댑터를 세션에 마운트합니다.
"""

import json
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, unquote, urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter

from etcdkv.adapters.etcd.client import EtcdClient
from etcdkv.adapters.etcd.transport import HttpTransport
from etcdkv.core.models import Endpoint
from etcdkv.settings import Settings


def _response(request, status: int, body) -> requests.Response:
    """requests.Response를 직접 조립합니다."""
    resp = requests.Response()
    resp.status_code = status
    resp._content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    resp.headers["Content-Type"] = "application/json"
    resp.encoding = "utf-8"
    resp.url = request.url
    resp.request = request
    return resp


class FakeEtcdAdapter(BaseAdapter):
    """메모리 기반 etcd v1 서버 흉내"""

    def __init__(self):
        super().__init__()
        self.store: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}
        self.index = 0
        self.calls: List[Tuple[str, str, Optional[str]]] = []

    def _key(self, url: str) -> str:
        path = unquote(urlsplit(url).path)
        prefix = "/v1/keys"
        assert path.startswith(prefix + "/"), path
        return path[len(prefix):]

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        body = request.body.decode("utf-8") if isinstance(request.body, bytes) else request.body
        self.calls.append((request.method, request.url, body))
        key = self._key(request.url)

        if request.method == "GET":
            return self._get(request, key)
        if request.method == "POST":
            return self._post(request, key, dict(parse_qsl(body or "", keep_blank_values=True)))
        if request.method == "DELETE":
            return self._delete(request, key)
        return _response(request, 405, {"errorCode": 0, "message": "method not allowed"})

    def _not_found(self, request, key):
        return _response(request, 404, {"errorCode": 100, "message": "Key Not Found", "cause": key})

    def _get(self, request, key):
        if key not in self.store:
            return self._not_found(request, key)
        return _response(request, 200, {"action": "GET", "key": key, "value": self.store[key], "index": self.index})

    def _post(self, request, key, form):
        prev = form.get("prevValue")
        if prev is not None:
            if key not in self.store:
                return self._not_found(request, key)
            if self.store[key] != prev:
                return _response(request, 400, {
                    "errorCode": 101,
                    "message": "The given PrevValue is not equal to the value of the key",
                    "cause": f"TestAndSet: {prev}!={self.store[key]}",
                })
        self.index += 1
        self.store[key] = form["value"]
        if "ttl" in form:
            self.ttls[key] = int(form["ttl"])
        else:
            self.ttls.pop(key, None)
        return _response(request, 200, {"action": "SET", "key": key, "value": form["value"], "index": self.index})

    def _delete(self, request, key):
        if key not in self.store:
            return self._not_found(request, key)
        self.index += 1
        prev = self.store.pop(key)
        self.ttls.pop(key, None)
        return _response(request, 200, {"action": "DELETE", "key": key, "prevValue": prev, "index": self.index})

    def close(self):
        pass


class CannedAdapter(BaseAdapter):
    """고정 상태 코드/본문을 돌려주는 어댑터"""

    def __init__(self, status: int = 200, body=b"{}"):
        super().__init__()
        self.status = status
        self.body = body
        self.calls = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.calls.append((request, timeout))
        return _response(request, self.status, self.body)

    def close(self):
        pass


class RaisingAdapter(BaseAdapter):
    """항상 예외를 발생시키는 어댑터"""

    def __init__(self, exc: Exception):
        super().__init__()
        self.exc = exc
        self.calls = 0

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.calls += 1
        raise self.exc

    def close(self):
        pass


def make_client(adapter: BaseAdapter, **kwargs) -> EtcdClient:
    """어댑터를 마운트한 세션으로 클라이언트를 만듭니다."""
    session = requests.Session()
    session.mount("http://", adapter)
    transport = HttpTransport(timeout=kwargs.pop("timeout", 5.0), session=session)
    endpoint = kwargs.pop("endpoint", Endpoint(host="127.0.0.1", port=4001))
    return EtcdClient(endpoint, transport=transport, **kwargs)


@pytest.fixture
def endpoint():
    """테스트용 엔드포인트"""
    return Endpoint(host="127.0.0.1", port=4001)


@pytest.fixture
def fake_etcd():
    """메모리 기반 etcd 서버"""
    return FakeEtcdAdapter()


@pytest.fixture
def client(fake_etcd):
    """가짜 서버에 연결된 클라이언트"""
    with make_client(fake_etcd) as c:
        yield c


@pytest.fixture(scope="session")
def client_factory():
    """hypothesis 테스트용 클라이언트 팩토리 (매번 새 서버)"""
    def _factory(**kwargs):
        adapter = FakeEtcdAdapter()
        return make_client(adapter, **kwargs), adapter
    return _factory


@pytest.fixture(scope="session")
def canned_client():
    """고정 응답을 돌려주는 클라이언트 팩토리"""
    def _factory(status: int = 200, body=b"{}", **kwargs):
        adapter = CannedAdapter(status, body)
        return make_client(adapter, **kwargs), adapter
    return _factory


@pytest.fixture(scope="session")
def raising_client():
    """요청마다 예외가 나는 클라이언트 팩토리"""
    def _factory(exc: Exception, **kwargs):
        adapter = RaisingAdapter(exc)
        return make_client(adapter, **kwargs), adapter
    return _factory


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.etcd.host = "etcd.local"
    settings.etcd.port = 4001
    settings.observability.log_level = "DEBUG"
    settings.observability.metrics_enabled = False
    return settings


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)
