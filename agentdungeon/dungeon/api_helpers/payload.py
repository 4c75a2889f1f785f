"""JSON payload builders for generation results and frames.

Isolated so the HTTP blueprint, the Socket.IO handler and the CLI emit the
same shapes.
"""

from agentdungeon.dungeon import Frame, GenerationResult, GridView
from agentdungeon.utils.tile_compress import encode_coords, encode_rows


def view_payload(view: GridView) -> dict:
    return {"size": view.size, "rows": encode_rows(view.rows()), "filled": view.filled_count}


def frame_payload(frame: Frame, index: int | None = None) -> dict:
    data = view_payload(frame.view)
    data.update(
        agent=list(frame.agent),
        direction_chance=frame.direction_chance,
        room_chance=frame.room_chance,
        debug=encode_coords(frame.debug) if frame.debug else None,
    )
    if index is not None:
        data["index"] = index
    return data


def result_payload(result: GenerationResult, frames=None) -> dict:
    data = view_payload(result.view)
    data.update(
        seed=result.seed,
        strategy=result.strategy,
        agent=list(result.agent),
        rooms=[[r.col1, r.col2, r.row1, r.row2] for r in result.rooms],
        metrics=result.metrics,
    )
    if frames is not None:
        data["frames"] = [frame_payload(f, i) for i, f in enumerate(frames)]
    return data
