"""Output Formatter: renders settings and map previews, writes committed areas as YAML."""

import re
from pathlib import Path

import yaml

from areawiz.config import PROJECT_ROOT, get_config

LEGEND = "Legend: '.' = filled cell, '#' = empty"

# Compass exits to the neighbouring cell, as (dx, dy) with y growing southwards
_EXITS = {
    "north": (0, -1),
    "east": (1, 0),
    "south": (0, 1),
    "west": (-1, 0),
}

# Area info keys written to the manifest, from the answers that hold them
_INFO_KEYS = {
    "areaAuthor": "author",
    "areaDescription": "description",
    "areaRespawnInterval": "respawnInterval",
}


def settings_summary(answers: dict, hidden: set[str] | frozenset = frozenset()) -> dict:
    """Return the answers shown to the operator for review, in resolution order."""
    return {k: v for k, v in answers.items() if k not in hidden}


def render_settings(summary: dict) -> str:
    """Render reviewed settings as an aligned `name: value` block."""
    if not summary:
        return "  (no settings)"
    width = max(len(name) for name in summary)
    lines = []
    for name, value in summary.items():
        if isinstance(value, float):
            value = f"{value:g}"
        lines.append(f"  {name.ljust(width)} : {value}")
    return "\n".join(lines)


def render_graphic(width: int, height: int, cells) -> str:
    """Draw a width x height grid, '.' for cells in `cells` and '#' elsewhere."""
    rows = []
    for y in range(height):
        rows.append("".join("." if (x, y) in cells else "#" for x in range(width)))
    return "\n".join(rows)


def render_preview(graphic: str) -> str:
    return f"{graphic}\n\n{LEGEND}"


def _room_id(x: int, y: int) -> str:
    return f"r{x}-{y}"


def area_slug(title: str) -> str:
    """Lowercase, dash-separated directory name for an area title."""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "area"


def build_area_document(options: dict, rooms) -> dict:
    """Build the manifest and room list for an area from generator options.

    Every room gets the generic title/description and exits towards each
    neighbouring room.
    """
    info = {
        target: options[source]
        for source, target in _INFO_KEYS.items()
        if source in options
    }
    manifest = {"title": options["areaTitle"]}
    if info:
        manifest["info"] = info

    room_list = []
    for x, y in sorted(rooms, key=lambda cell: (cell[1], cell[0])):
        exits = []
        for direction, (dx, dy) in _EXITS.items():
            neighbour = (x + dx, y + dy)
            if neighbour in rooms:
                exits.append({"direction": direction, "roomId": _room_id(*neighbour)})
        room_list.append({
            "id": _room_id(x, y),
            "title": options["genericRoomTitle"],
            "description": options["genericRoomDesc"],
            "coordinates": [x, y, 0],
            "exits": exits,
        })

    return {"manifest": manifest, "rooms": room_list}


def write_area(document: dict) -> Path:
    """Write an area document under the configured output directory.

    The area gets its own directory named after its title; an existing
    directory is never overwritten, a numbered sibling is used instead.

    Returns the Path to the written directory.
    """
    config = get_config()
    # Relative paths are taken from the project root; absolute ones win
    output_dir = PROJECT_ROOT / config["output_dir"]
    output_dir.mkdir(parents=True, exist_ok=True)

    stem = area_slug(document["manifest"]["title"])

    # Find a non-conflicting directory name
    area_dir = output_dir / stem
    counter = 1
    while area_dir.exists():
        counter += 1
        area_dir = output_dir / f"{stem}-{counter}"
    area_dir.mkdir()

    (area_dir / "manifest.yml").write_text(
        yaml.safe_dump(document["manifest"], sort_keys=False), encoding="utf-8"
    )
    (area_dir / "rooms.yml").write_text(
        yaml.safe_dump(document["rooms"], sort_keys=False), encoding="utf-8"
    )
    return area_dir
