from pydantic import BaseModel, Field


class ToolchainStep(BaseModel, frozen=True):
    """One provisioning command run before any check (e.g. a rustup install)."""

    name: str = Field(min_length=1)
    command: str = Field(min_length=1)
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.command, *self.args]

    @property
    def display_command(self) -> str:
        return " ".join(self.argv)
