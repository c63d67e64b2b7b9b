"""Settings for the demo data reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var, optional_int_env_var
from .errors import ConfigurationError

DEFAULT_ADMIN_PERSON_ID: Final[int] = 1
DEFAULT_SCHEDULER_USERNAME: Final[str] = "admin"
DEFAULT_SCHEDULER_PASSWORD: Final[str] = "Admin123"  # noqa: S105


@dataclass(frozen=True, slots=True)
class SeedConfig:
    """Values the reconciler takes from the deployment rather than from the demo tables."""

    admin_person_id: int = DEFAULT_ADMIN_PERSON_ID
    scheduler_username: str = DEFAULT_SCHEDULER_USERNAME
    scheduler_password: str = DEFAULT_SCHEDULER_PASSWORD

    def __post_init__(self) -> None:
        if self.admin_person_id < 1:
            raise ConfigurationError("admin_person_id must be a positive integer")


def get_seed_config() -> SeedConfig:
    admin_person_id = optional_int_env_var("REFDEMO_ADMIN_PERSON_ID")
    return SeedConfig(
        admin_person_id=admin_person_id or DEFAULT_ADMIN_PERSON_ID,
        scheduler_username=(
            optional_env_var("REFDEMO_SCHEDULER_USERNAME") or DEFAULT_SCHEDULER_USERNAME
        ),
        scheduler_password=(
            optional_env_var("REFDEMO_SCHEDULER_PASSWORD") or DEFAULT_SCHEDULER_PASSWORD
        ),
    )
