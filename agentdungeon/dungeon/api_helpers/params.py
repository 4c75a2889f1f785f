"""Turn loosely typed request parameters into a validated generation config."""

from typing import Any, Optional, Tuple

from agentdungeon.dungeon import STRATEGIES, ConfigError, DungeonConfig, coerce_seed

MAX_SIZE = 99


def _as_int(field: str, value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ConfigError(field, "must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(field, "must be an integer") from None


def build_generation_config(
    defaults: DungeonConfig,
    strategy: Optional[str] = None,
    seed: Any = None,
    size: Any = None,
) -> Tuple[str, DungeonConfig]:
    """Return ``(strategy, config)`` for a request, raising ConfigError on bad input.

    A missing seed gets a fresh random one so the response can report it.
    """
    strategy = (strategy or "constructive").strip().lower()
    if strategy not in STRATEGIES:
        raise ConfigError("strategy", f"must be one of {', '.join(STRATEGIES)}")
    size_val = _as_int("size", size)
    if size_val is not None and size_val > MAX_SIZE:
        raise ConfigError("size", f"must be at most {MAX_SIZE}")
    seed_val = coerce_seed(seed) if seed not in (None, "") else defaults.seed
    if seed_val is None:
        seed_val = coerce_seed(None)
    config = defaults.with_overrides(size=size_val, seed=seed_val).validate()
    return strategy, config
