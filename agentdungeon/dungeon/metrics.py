from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'iterations': 0,
        'rooms_placed': 0,
        'room_failures': 0,
        'corridors_placed': 0,
        'corridor_failures': 0,
        'direction_changes': 0,
        'snapshots': 0,
        'filled_tiles': 0,
        'fill_ratio': 0.0,
        'runtime_ms': 0,
    }
