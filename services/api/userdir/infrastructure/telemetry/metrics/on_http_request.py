from opentelemetry import metrics


meter = metrics.get_meter("userdir.metrics")
AUTH_PATH = '/login'
PUBLIC_PATHS = {AUTH_PATH, '/health'}


http_requests_total = meter.create_counter(
    "http_requests_total",
    description="Total HTTP requests",
)

auth_logins_total = meter.create_counter(
    "auth_logins_total",
    description="Number of login attempts by outcome",
)

auth_rejections_total = meter.create_counter(
    "auth_rejections_total",
    description="Requests to protected routes answered with 401 (bad token or foreign resource)",
)


def _route_path(request) -> str:
    return getattr(request.scope.get("route"), "path", request.url.path)


async def requests_metric_middleware(request, call_next):
    response = await call_next(request)

    route_path = _route_path(request)
    http_requests_total.add(
        1,
        {
            "http_method": request.method,
            "http_target": route_path,
            "status_code": str(response.status_code),
        },
    )
    if route_path == AUTH_PATH:
        status = "success" if response.status_code == 200 else "failure"
        auth_logins_total.add(1, {"status": status})
    elif response.status_code == 401 and route_path not in PUBLIC_PATHS:
        auth_rejections_total.add(1, {"http_method": request.method, "http_target": route_path})

    return response
