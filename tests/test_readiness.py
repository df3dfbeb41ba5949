import psycopg2
import pytest

from services.readiness import ReadinessGuard
from tests.fakes import FakeBootstrap


def test_healthy_store_skips_bootstrap(readiness, gateway, bootstrap):
    assert readiness.ensure_ready() is True
    assert gateway.pings == 1
    assert bootstrap.calls == 0


def test_unreachable_store_bootstraps_once(readiness, gateway, bootstrap):
    gateway.down = True
    assert readiness.ensure_ready() is True
    assert bootstrap.calls == 1


def test_failed_bootstrap_still_reports_ready(gateway):
    failing = FakeBootstrap(ok=False)
    gateway.down = True
    assert ReadinessGuard(gateway, failing).ensure_ready() is True
    assert failing.calls == 1


def test_probe_raises_for_health_checks(readiness, gateway):
    gateway.down = True
    with pytest.raises(psycopg2.OperationalError):
        readiness.probe()
