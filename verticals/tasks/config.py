"""Tasks vertical configuration.

Frozen dataclass in the domain config pattern: defaults out of the box,
overridable from TASKS_* environment variables.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class TasksConfig:
    """Configuration for the tasks vertical.

    Usage::

        config = TasksConfig.from_env()
        repo = TaskRepository.seeded() if config.seed_defaults else TaskRepository()
    """

    seed_defaults: bool = True
    not_found_message: str = "Task not found"

    @classmethod
    def default(cls) -> "TasksConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "TASKS_") -> "TasksConfig":
        """Create config from environment variables.

        Example: TASKS_SEED_DEFAULTS=false
        """
        overrides = {}
        seed = os.getenv(f"{prefix}SEED_DEFAULTS")
        if seed:
            overrides["seed_defaults"] = seed.lower() in ("1", "true", "yes", "on")
        message = os.getenv(f"{prefix}NOT_FOUND_MESSAGE")
        if message:
            overrides["not_found_message"] = message

        return cls(**overrides)


# Default configuration instance
config = TasksConfig.from_env()
