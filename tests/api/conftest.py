import pytest
from apscheduler.schedulers.background import BackgroundScheduler
from fastapi.testclient import TestClient

from apps.api.main import app
from apps.api.routes import categories as categories_module
from apps.api.routes import reminders as reminders_module
from apps.api.routes import templates as templates_module
from apps.api.runtime import build_runtime
from packages.core.reminders.config import EngineSettings


@pytest.fixture
def runtime(monkeypatch, tmp_path):
    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.start(paused=True)
    runtime = build_runtime(EngineSettings(db_path=str(tmp_path / "api.db")), scheduler=scheduler)
    monkeypatch.setattr(reminders_module, "_runtime", lambda: runtime)
    monkeypatch.setattr(categories_module, "_runtime", lambda: runtime)
    monkeypatch.setattr(templates_module, "_runtime", lambda: runtime)
    yield runtime
    runtime.queue.shutdown()
    scheduler.shutdown(wait=False)


@pytest.fixture
def client(runtime):
    return TestClient(app)
