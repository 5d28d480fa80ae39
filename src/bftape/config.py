from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from .errors import ConfigError
from .interpreter import DEFAULT_POLL_INTERVAL, DEFAULT_TAPE_SIZE


@dataclass(frozen=True)
class RunConfig:
    tape_size: int = DEFAULT_TAPE_SIZE
    optimize: bool = True
    step_limit: Optional[int] = None  # None or 0: unbounded
    debug: bool = False
    poll_interval: int = DEFAULT_POLL_INTERVAL

    def __post_init__(self) -> None:
        _require_int('tape_size', self.tape_size)
        if self.tape_size <= 0:
            raise ConfigError(message=f"tape_size must be positive, got {self.tape_size}", option='tape_size')
        _require_int('poll_interval', self.poll_interval)
        if self.poll_interval <= 0:
            raise ConfigError(
                message=f"poll_interval must be positive, got {self.poll_interval}", option='poll_interval'
            )
        if self.step_limit is not None:
            _require_int('step_limit', self.step_limit)
            if self.step_limit < 0:
                raise ConfigError(
                    message=f"step_limit must not be negative, got {self.step_limit}", option='step_limit'
                )
            if self.step_limit == 0:
                object.__setattr__(self, 'step_limit', None)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'RunConfig':
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(message=f"Unknown option(s): {', '.join(unknown)}", option=unknown[0])
        return cls(**dict(data))


def _require_int(name: str, value: Any) -> None:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(message=f"{name} must be an integer, got {value!r}", option=name)
