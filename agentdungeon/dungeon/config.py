import hashlib
import math
import os
import random
import re
from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping, Optional

STRATEGIES = ("constructive", "stochastic")

SEED_MAX = 2**31 - 1

_INT_SEED = re.compile(r"-?[0-9]+")


class ConfigError(ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


@dataclass
class DungeonConfig:
    size: int = 25
    min_size: int = 3
    max_size: int = 7
    fill_target: float = 0.4
    chance_step: int = 2
    seed: Optional[int] = None

    @property
    def fill_goal(self) -> int:
        """Non-Void tile count at which the stochastic walk stops."""
        return math.ceil(round(self.fill_target * self.size * self.size, 9))

    def validate(self) -> "DungeonConfig":
        if self.min_size < 1:
            raise ConfigError("min_size", "must be at least 1")
        if self.max_size < self.min_size:
            raise ConfigError("max_size", "must be >= min_size")
        # room of min_size plus the empty border and one buffer tile each side
        if self.size < self.min_size + 4:
            raise ConfigError("size", f"must be at least {self.min_size + 4}")
        if not 0 < self.fill_target < 1:
            raise ConfigError("fill_target", "must be between 0 and 1 (exclusive)")
        if self.fill_goal > (self.size - 2) ** 2:
            raise ConfigError("fill_target", "exceeds the carvable interior")
        if self.chance_step < 1:
            raise ConfigError("chance_step", "must be at least 1")
        return self

    def with_overrides(self, **changes) -> "DungeonConfig":
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DungeonConfig":
        """Build a config from ``DUNGEON_*`` environment variables."""
        env = os.environ if environ is None else environ
        env_map = {
            "DUNGEON_SIZE": ("size", int),
            "DUNGEON_MIN_SIZE": ("min_size", int),
            "DUNGEON_MAX_SIZE": ("max_size", int),
            "DUNGEON_FILL_TARGET": ("fill_target", float),
            "DUNGEON_CHANCE_STEP": ("chance_step", int),
            "DUNGEON_SEED": ("seed", coerce_seed),
        }
        values = {}
        for env_key, (attr, conv) in env_map.items():
            raw = env.get(env_key, "").strip()
            if not raw:
                continue
            try:
                values[attr] = conv(raw)
            except ValueError:
                raise ConfigError(attr, f"invalid value {raw!r} in {env_key}") from None
        return cls(**values).validate()

    @classmethod
    def from_app_config(cls, cfg: Mapping[str, Any], base: Optional["DungeonConfig"] = None) -> "DungeonConfig":
        """Overlay ``DUNGEON_*`` keys from a Flask config mapping onto ``base``."""
        base = base or cls()
        keys = {
            "DUNGEON_SIZE": "size",
            "DUNGEON_MIN_SIZE": "min_size",
            "DUNGEON_MAX_SIZE": "max_size",
            "DUNGEON_FILL_TARGET": "fill_target",
            "DUNGEON_CHANCE_STEP": "chance_step",
        }
        changes = {attr: cfg[key] for key, attr in keys.items() if key in cfg}
        return base.with_overrides(**changes).validate()


def coerce_seed(value) -> int:
    """Convert an int or str seed into a bounded non-negative int.

    Plain ASCII integers are parsed; any other string (words, "--5")
    hashes deterministically, so the same word always yields the same
    dungeon. ``None`` or blank picks a random seed.
    """
    if value is None:
        return random.randint(0, SEED_MAX)
    if isinstance(value, bool):
        raise ConfigError("seed", "must be an int or string")
    if isinstance(value, int):
        return value % (SEED_MAX + 1)
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return random.randint(0, SEED_MAX)
        if _INT_SEED.fullmatch(s):
            return int(s) % (SEED_MAX + 1)
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % (SEED_MAX + 1)
    raise ConfigError("seed", "must be an int or string")


__all__ = ["DungeonConfig", "ConfigError", "STRATEGIES", "coerce_seed"]
