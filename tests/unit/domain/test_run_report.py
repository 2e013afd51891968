from collections.abc import Callable

import pytest
from pydantic import ValidationError

from cigate.domain.entities.check_result import CheckResult
from cigate.domain.entities.run_report import RunReport
from cigate.domain.value_objects.check_types import CheckOutcome, CheckSpec
from cigate.domain.value_objects.run_status import RunStatus


class TestCheckSpec:
    def test_argv_puts_command_first(self) -> None:
        spec = CheckSpec(name="fmt", command="cargo", args=("fmt", "--check"))

        assert spec.argv == ["cargo", "fmt", "--check"]
        assert spec.display_command == "cargo fmt --check"

    def test_is_immutable(self) -> None:
        spec = CheckSpec(name="fmt", command="cargo")

        with pytest.raises(ValidationError):
            spec.name = "other"  # type: ignore[misc]

    def test_rejects_empty_command(self) -> None:
        with pytest.raises(ValidationError):
            CheckSpec(name="fmt", command="")

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            CheckSpec(name="fmt", command="cargo", timeout_s=0)


class TestCheckResult:
    def test_output_joins_streams(self) -> None:
        result = CheckResult(
            spec=CheckSpec(name="lint", command="cargo"),
            exit_code=1,
            outcome=CheckOutcome.FAILED,
            stdout="warning: unused",
            stderr="error: aborting",
        )

        assert result.output == "warning: unused\nerror: aborting"
        assert result.name == "lint"
        assert not result.passed

    def test_output_empty_without_capture(self) -> None:
        result = CheckResult(
            spec=CheckSpec(name="lint", command="cargo"),
            exit_code=0,
            outcome=CheckOutcome.PASSED,
        )

        assert result.output == ""


class TestRunReport:
    def test_all_passing_is_success(self, result_factory: Callable[..., CheckResult]) -> None:
        report = RunReport.from_results([result_factory("a", 0), result_factory("b", 0)])

        assert report.status == RunStatus.SUCCESS
        assert report.passed
        assert report.exit_code == 0
        assert report.failed_results == ()

    def test_one_failure_fails_run(self, result_factory: Callable[..., CheckResult]) -> None:
        report = RunReport.from_results([result_factory("a", 1), result_factory("b", 0)])

        assert report.status == RunStatus.FAILURE
        assert report.exit_code != 0
        assert [r.name for r in report.failed_results] == ["a"]
        assert report.passed_count == 1
        assert report.failed_count == 1

    def test_both_failures_recorded(self, result_factory: Callable[..., CheckResult]) -> None:
        report = RunReport.from_results([result_factory("a", 1), result_factory("b", 1)])

        assert [r.name for r in report.failed_results] == ["a", "b"]

    def test_preserves_order(self, result_factory: Callable[..., CheckResult]) -> None:
        results = [result_factory(n, 0) for n in ("z", "a", "m")]

        report = RunReport.from_results(results)

        assert [r.name for r in report.results] == ["z", "a", "m"]

    def test_launch_failure_counts_as_failure(
        self, result_factory: Callable[..., CheckResult]
    ) -> None:
        report = RunReport.from_results(
            [result_factory("a", 0), result_factory("b", 127, CheckOutcome.LAUNCH_FAILED)]
        )

        assert report.status == RunStatus.FAILURE

    def test_serialized_report_includes_status(
        self, result_factory: Callable[..., CheckResult]
    ) -> None:
        report = RunReport.from_results([result_factory("a", 2)])

        data = report.model_dump(mode="json")

        assert data["status"] == "failure"
        assert data["results"][0]["exit_code"] == 2

    def test_json_round_trip_keeps_verdict(
        self, result_factory: Callable[..., CheckResult]
    ) -> None:
        report = RunReport.from_results([result_factory("a", 0), result_factory("b", 3)])

        restored = RunReport.model_validate_json(report.model_dump_json())

        assert restored.run_id == report.run_id
        assert restored.status == RunStatus.FAILURE
        assert [r.exit_code for r in restored.results] == [0, 3]
