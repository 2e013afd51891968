from pathlib import Path

import pytest

from cigate.domain.errors import ToolchainError
from cigate.domain.value_objects.check_types import LAUNCH_FAILURE_EXIT_CODE
from cigate.domain.value_objects.toolchain_types import ToolchainStep
from cigate.infrastructure.toolchain.command_toolchain_provisioner import (
    CommandToolchainProvisioner,
)


def sh_step(name: str, script: str) -> ToolchainStep:
    return ToolchainStep(name=name, command="sh", args=("-c", script))


@pytest.fixture
def provisioner() -> CommandToolchainProvisioner:
    return CommandToolchainProvisioner(max_attempts=3, wait_multiplier=0, wait_max=0)


class TestCommandToolchainProvisioner:
    async def test_runs_steps_in_order(
        self, provisioner: CommandToolchainProvisioner, tmp_path: Path
    ) -> None:
        steps = [
            sh_step("install", "echo install >> log.txt"),
            sh_step("select", "echo select >> log.txt"),
        ]

        await provisioner.provision(steps, str(tmp_path))

        assert (tmp_path / "log.txt").read_text().split() == ["install", "select"]

    async def test_failed_step_raises_and_stops(
        self, provisioner: CommandToolchainProvisioner, tmp_path: Path
    ) -> None:
        steps = [
            sh_step("install", "echo 'error: no network'; exit 4"),
            sh_step("select", "touch selected"),
        ]

        with pytest.raises(ToolchainError) as exc_info:
            await provisioner.provision(steps, str(tmp_path))

        assert exc_info.value.step_name == "install"
        assert exc_info.value.exit_code == 4
        assert "no network" in exc_info.value.output
        assert not (tmp_path / "selected").exists()

    async def test_transient_failure_is_retried(
        self, provisioner: CommandToolchainProvisioner, tmp_path: Path
    ) -> None:
        # Fails on the first attempt, succeeds on the second
        script = "if [ -f attempted ]; then exit 0; fi; touch attempted; exit 1"

        await provisioner.provision([sh_step("install", script)], str(tmp_path))

        assert (tmp_path / "attempted").exists()

    async def test_gives_up_after_max_attempts(self, tmp_path: Path) -> None:
        provisioner = CommandToolchainProvisioner(max_attempts=2, wait_multiplier=0, wait_max=0)
        script = "echo x >> attempts.txt; exit 1"

        with pytest.raises(ToolchainError):
            await provisioner.provision([sh_step("install", script)], str(tmp_path))

        assert len((tmp_path / "attempts.txt").read_text().split()) == 2

    async def test_missing_executable_is_not_retried(
        self, provisioner: CommandToolchainProvisioner, tmp_path: Path
    ) -> None:
        step = ToolchainStep(name="install", command="nonexistent_rustup_12345")

        with pytest.raises(ToolchainError) as exc_info:
            await provisioner.provision([step], str(tmp_path))

        assert exc_info.value.exit_code == LAUNCH_FAILURE_EXIT_CODE

    async def test_no_steps_is_a_no_op(
        self, provisioner: CommandToolchainProvisioner, tmp_path: Path
    ) -> None:
        await provisioner.provision([], str(tmp_path))
