from .on_http_request import requests_metric_middleware, AUTH_PATH


def register_middlewares(app):
    app.middleware("http")(requests_metric_middleware)
