import pytest
from userdir.infrastructure.telemetry.metrics import requests_metric_middleware
import userdir.infrastructure.telemetry.metrics.on_http_request as m

class MockResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

class MockRoute:
    def __init__(self, url='/some/url'):
        self.path = url

class MockURL:
    def __init__(self, url):
        self.path = url

class MockRequest:
    def __init__(self, method='GET', url='/users', response_params={}, routed=True):
        self.scope = {'route':MockRoute(url)} if routed else {}
        self.method = method
        self.response_params = response_params
        self.url = MockURL(url)

async def mock_call_next(request:MockRequest):
    return MockResponse(**request.response_params)


@pytest.fixture
def counters(mocker, monkeypatch):
    mocks = {name: mocker.MagicMock() for name in ('http_requests_total', 'auth_logins_total', 'auth_rejections_total')}
    for name, mock in mocks.items():
        monkeypatch.setattr(m, name, mock)
    return mocks


@pytest.mark.parametrize("status, outcome", [(401, 'failure'), (200, 'success')])
async def test_requests_metric_middleware_login(counters, status, outcome):
    req = MockRequest('POST', '/login', response_params={'status_code':status})

    await requests_metric_middleware(req, mock_call_next)
    counters['http_requests_total'].add.assert_called_once_with(1,
        {
            "http_method": req.method,
            "http_target": req.scope.get('route').path,
            "status_code": str(status),
        }
    )
    counters['auth_logins_total'].add.assert_called_once_with(1, {'status': outcome})
    counters['auth_rejections_total'].add.assert_not_called()


async def test_requests_metric_middleware_rejection(counters):
    req = MockRequest('PATCH', '/users/{user_id}', response_params={'status_code': 401})
    await requests_metric_middleware(req, mock_call_next)
    counters['auth_logins_total'].add.assert_not_called()
    counters['auth_rejections_total'].add.assert_called_once_with(1, {"http_method": "PATCH", "http_target": "/users/{user_id}"})


async def test_requests_metric_middleware_unrouted(counters):
    req = MockRequest('GET', '/nowhere', response_params={'status_code': 404}, routed=False)
    await requests_metric_middleware(req, mock_call_next)
    counters['http_requests_total'].add.assert_called_once_with(1, {"http_method": "GET", "http_target": "/nowhere", "status_code": "404"})
