"""Unit tests for run outcome models (devstarter.results)."""

from __future__ import annotations

import pytest

from devstarter.results import RunReport, SideResult, SideStatus, StageFailure

pytestmark = pytest.mark.unit


def _failed(side: str = "client") -> SideResult:
    return SideResult(
        side=side,
        folder=side,
        status=SideStatus.FAILED,
        failure=StageFailure(stage="install", cause="boom", command="npm install x", returncode=1),
    )


def test_side_result_defaults_to_ok():
    result = SideResult(side="client", folder="app")
    assert result.ok
    assert result.failure is None


def test_empty_report_is_not_success():
    assert RunReport().success is False


def test_all_ok_is_success():
    report = RunReport(
        results=[SideResult(side="client", folder="app"), SideResult(side="server", folder="api")]
    )
    assert report.success
    assert report.failure is None


def test_failure_and_skip():
    report = RunReport(
        results=[_failed(), SideResult(side="server", folder="server", status=SideStatus.SKIPPED)]
    )
    assert not report.success
    assert report.failure is not None
    assert report.failure.side == "client"
    assert report.get("server").status is SideStatus.SKIPPED
    assert report.get("nothing") is None


def test_dump_includes_computed_fields():
    data = RunReport(results=[_failed()]).model_dump(mode="json")
    assert data["success"] is False
    assert data["results"][0]["ok"] is False
    assert data["results"][0]["status"] == "failed"
    assert data["results"][0]["failure"]["returncode"] == 1
