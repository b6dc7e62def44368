"""Load-time configuration errors."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigProblem:
    field: str    # camelCase descriptor field or env var name
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ConfigurationError(Exception):
    """Raised when the descriptor is missing or contradicts a required field."""

    def __init__(self, problems: list[ConfigProblem]):
        self.problems = list(problems)
        detail = "; ".join(str(p) for p in self.problems)
        super().__init__(f"Invalid API client configuration: {detail}")

    @property
    def fields(self) -> list[str]:
        return [p.field for p in self.problems]
