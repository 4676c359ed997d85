import pytest

from backend import serve
from backend.core import config


def test_main_runs_app_with_configured_address(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(serve.uvicorn, 'run', lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(config, 'HOST', '0.0.0.0')
    monkeypatch.setattr(config, 'PORT', 9001)

    serve.main()

    assert calls == [('backend.main:app', {'host': '0.0.0.0', 'port': 9001, 'log_level': config.LOG_LEVEL.lower()})]
