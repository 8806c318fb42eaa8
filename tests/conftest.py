# pytest configuration hooks.
#
# Policy: No skipped tests. If something cannot run in this environment, use xfail with a clear reason.

from __future__ import annotations

import logging
import os

import pytest

# Register pytest-bdd step definitions as a pytest plugin so fixtures are discoverable.
pytest_plugins = ["tests.bdd.steps"]

_SKIP_COUNT = 0


def pytest_configure() -> None:
    # Tests must see the packaged default config unless they opt into another one.
    os.environ.pop("TESTWEAVER_DEFAULTS_DIR", None)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    # In-process CLI runs bind handlers to streams that are closed afterwards.
    log = logging.getLogger("testweaver")
    for handler in list(log.handlers):
        log.removeHandler(handler)
    log.setLevel(logging.NOTSET)


def pytest_runtest_logreport(report: pytest.TestReport) -> None:
    global _SKIP_COUNT
    if report.when == "setup" and report.outcome == "skipped":
        _SKIP_COUNT += 1


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    if _SKIP_COUNT > 0:
        pytest.exit(f"Skipped tests are not allowed (skipped={_SKIP_COUNT}).", returncode=2)
