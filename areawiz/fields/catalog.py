"""Field catalog: the ordered questions asked to configure one area.

Fields are declared top to bottom in resolution order. A field may only read
answers named in its depends_on, and those must be declared above it.
"""

from areawiz.fields.schema import (
    VALID,
    FieldKind,
    FieldSpec,
    GroupLabel,
    Invalid,
    Selectable,
)
from areawiz.utils.ordering import check_field_order
from areawiz.utils.validator import (
    is_alphanumeric,
    is_map_type,
    is_number,
    is_percentage,
    is_positive_number,
    to_integer,
    to_percentage,
    validate_input,
)

# Map algorithms offered to the operator, grouped under a heading each
MAP_TYPE_GROUPS = {
    "Dungeons": ["Digger", "Uniform", "Rogue"],
    "Mazes": ["DividedMaze", "IceyMaze", "EllerMaze"],
    "Caves": ["Cellular"],
    "Open": ["Arena"],
}

MAP_TYPES = [name for names in MAP_TYPE_GROUPS.values() for name in names]

# Smallest width/height that still leaves room for a minimum below a maximum
MIN_DIMENSION = 2


def _map_type_choices() -> tuple:
    choices = []
    for heading, names in MAP_TYPE_GROUPS.items():
        choices.append(GroupLabel(heading))
        choices.extend(Selectable(name) for name in names)
    return tuple(choices)


def _bound(value, answers):
    return value(answers) if callable(value) else value


def _whole_number(what: str, low=1, high=None):
    """Validator accepting numbers whose floor lies in [low, high].

    low and high are ints or callables of the answers resolved so far.
    """

    def _validate(raw, answers):
        lo = _bound(low, answers)
        hi = _bound(high, answers)
        if lo >= 1 and not is_positive_number(raw):
            return Invalid(f"{what} must be a positive number.")
        if not is_number(raw):
            return Invalid(f"{what} must be a number.")
        value = to_integer(raw)
        if hi is None and value < lo:
            return Invalid(f"{what} must be at least {lo}.")
        if hi is not None and not lo <= value <= hi:
            return Invalid(f"{what} must be between {lo} and {hi}.")
        return VALID

    return _validate


def _percentage(what: str):
    def _validate(raw, answers):
        if not is_percentage(raw):
            return Invalid(f"{what} must be a number from 0 to 100.")
        return VALID

    return _validate


def _area_title(raw, answers):
    if not is_alphanumeric(raw):
        return Invalid("Area title must contain only letters, numbers and spaces.")
    return VALID


def _not_blank(what: str):
    def _validate(raw, answers):
        try:
            validate_input(raw)
        except ValueError:
            return Invalid(f"{what} cannot be empty.")
        return VALID

    return _validate


def _strip(raw):
    return raw.strip()


def _customizing(answers) -> bool:
    return answers.get("customizeAreaInfo", False)


def _smallest_side(answers) -> int:
    return min(answers["width"], answers["height"])


def build_fields(config: dict) -> list[FieldSpec]:
    """Build the ordered field list, using config for the static defaults.

    Raises ValueError if the declaration order is not a valid resolution order.
    """
    rooms_for = is_map_type("Digger", "Uniform")
    corridors_for = is_map_type("Digger")

    fields = [
        # --- Area ---
        FieldSpec(
            name="areaTitle",
            kind=FieldKind.FREE_TEXT,
            message="What is the title of this area?",
            validate=_area_title,
            filter=_strip,
        ),
        FieldSpec(
            name="customizeAreaInfo",
            kind=FieldKind.BOOLEAN_CONFIRM,
            message=lambda a: f"Customize the area info for {a['areaTitle']}?",
            default=False,
            depends_on=("areaTitle",),
            internal=True,
        ),
        FieldSpec(
            name="areaAuthor",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Who is the author of {a['areaTitle']}?",
            default="Unknown",
            when=_customizing,
            validate=_not_blank("Author"),
            filter=_strip,
            depends_on=("areaTitle", "customizeAreaInfo"),
        ),
        FieldSpec(
            name="areaDescription",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Describe {a['areaTitle']} in one line:",
            default=lambda a: f"The area known as {a['areaTitle']}.",
            when=_customizing,
            validate=_not_blank("Area description"),
            filter=_strip,
            depends_on=("areaTitle", "customizeAreaInfo"),
        ),
        FieldSpec(
            name="areaRespawnInterval",
            kind=FieldKind.FREE_TEXT,
            message="How many seconds between respawns?",
            default=config.get("default_respawn_interval", 60),
            when=_customizing,
            validate=_whole_number("Respawn interval"),
            filter=to_integer,
            depends_on=("customizeAreaInfo",),
        ),
        # --- Generic room info ---
        FieldSpec(
            name="genericRoomTitle",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Title given to every room in {a['areaTitle']}:",
            default=lambda a: f"{config.get('default_room_title', 'Room')} in {a['areaTitle']}",
            validate=_not_blank("Room title"),
            filter=_strip,
            depends_on=("areaTitle",),
        ),
        FieldSpec(
            name="genericRoomDesc",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Description given to every room in {a['areaTitle']}:",
            default=lambda a: f"You are in {a['areaTitle']}.",
            validate=_not_blank("Room description"),
            filter=_strip,
            depends_on=("areaTitle",),
        ),
        # --- Map ---
        FieldSpec(
            name="width",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"How many rooms wide is {a['areaTitle']}?",
            default=config.get("default_width", 20),
            validate=_whole_number("Width", low=MIN_DIMENSION),
            filter=to_integer,
            depends_on=("areaTitle",),
        ),
        FieldSpec(
            name="height",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"How many rooms high is {a['areaTitle']}?",
            default=config.get("default_height", 20),
            validate=_whole_number("Height", low=MIN_DIMENSION),
            filter=to_integer,
            depends_on=("areaTitle",),
        ),
        FieldSpec(
            name="type",
            kind=FieldKind.SINGLE_CHOICE,
            message=lambda a: f"Which map algorithm should lay out {a['areaTitle']}?",
            default=config.get("default_map_type", "Arena"),
            choices=_map_type_choices(),
            depends_on=("areaTitle",),
        ),
        # --- Digger / Uniform rooms ---
        FieldSpec(
            name="roomWidthMaximum",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Maximum room width (2 to {a['width']}):",
            default=lambda a: min(9, a["width"]),
            when=rooms_for,
            validate=_whole_number("Maximum room width", low=2, high=lambda a: a["width"]),
            filter=to_integer,
            depends_on=("type", "width"),
        ),
        FieldSpec(
            name="roomWidthMinimum",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Minimum room width (1 to {a['roomWidthMaximum'] - 1}):",
            default=lambda a: min(3, a["roomWidthMaximum"] - 1),
            when=rooms_for,
            validate=_whole_number(
                "Minimum room width", high=lambda a: a["roomWidthMaximum"] - 1
            ),
            filter=to_integer,
            depends_on=("type", "roomWidthMaximum"),
        ),
        FieldSpec(
            name="roomHeightMaximum",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Maximum room height (2 to {a['height']}):",
            default=lambda a: min(5, a["height"]),
            when=rooms_for,
            validate=_whole_number("Maximum room height", low=2, high=lambda a: a["height"]),
            filter=to_integer,
            depends_on=("type", "height"),
        ),
        FieldSpec(
            name="roomHeightMinimum",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Minimum room height (1 to {a['roomHeightMaximum'] - 1}):",
            default=lambda a: min(3, a["roomHeightMaximum"] - 1),
            when=rooms_for,
            validate=_whole_number(
                "Minimum room height", high=lambda a: a["roomHeightMaximum"] - 1
            ),
            filter=to_integer,
            depends_on=("type", "roomHeightMaximum"),
        ),
        # --- Digger corridors ---
        FieldSpec(
            name="corridorLengthMaximum",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Maximum corridor length (2 to {_smallest_side(a)}):",
            default=lambda a: min(10, _smallest_side(a)),
            when=corridors_for,
            validate=_whole_number("Maximum corridor length", low=2, high=_smallest_side),
            filter=to_integer,
            depends_on=("type", "width", "height"),
        ),
        FieldSpec(
            name="corridorLengthMinimum",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: (
                "Minimum corridor length (1 to "
                f"{min(_smallest_side(a), a['corridorLengthMaximum'] - 1)}):"
            ),
            default=lambda a: min(3, a["corridorLengthMaximum"] - 1),
            when=corridors_for,
            validate=_whole_number(
                "Minimum corridor length",
                high=lambda a: min(_smallest_side(a), a["corridorLengthMaximum"] - 1),
            ),
            filter=to_integer,
            depends_on=("type", "width", "height", "corridorLengthMaximum"),
        ),
        FieldSpec(
            name="dugPercentage",
            kind=FieldKind.FREE_TEXT,
            message="What percentage of the map should be dug out (0-100)?",
            default=20,
            when=rooms_for,
            validate=_percentage("Dug percentage"),
            filter=to_percentage,
            depends_on=("type",),
        ),
        FieldSpec(
            name="timeLimit",
            kind=FieldKind.FREE_TEXT,
            message="Generation time limit in milliseconds:",
            default=1000,
            when=rooms_for,
            validate=_whole_number("Time limit"),
            filter=to_integer,
            depends_on=("type",),
        ),
        # --- IceyMaze ---
        FieldSpec(
            name="regularity",
            kind=FieldKind.FREE_TEXT,
            message="Maze regularity (0 = most random):",
            default=0,
            when=is_map_type("IceyMaze"),
            validate=_whole_number("Regularity", low=0),
            filter=to_integer,
            depends_on=("type",),
        ),
        # --- Rogue ---
        FieldSpec(
            name="cellWidth",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Number of cells across (1 to {a['width']}):",
            default=lambda a: min(3, a["width"]),
            when=is_map_type("Rogue"),
            validate=_whole_number("Cell width", high=lambda a: a["width"]),
            filter=to_integer,
            depends_on=("type", "width"),
        ),
        FieldSpec(
            name="cellHeight",
            kind=FieldKind.FREE_TEXT,
            message=lambda a: f"Number of cells down (1 to {a['height']}):",
            default=lambda a: min(3, a["height"]),
            when=is_map_type("Rogue"),
            validate=_whole_number("Cell height", high=lambda a: a["height"]),
            filter=to_integer,
            depends_on=("type", "height"),
        ),
        # --- Cellular ---
        FieldSpec(
            name="probability",
            kind=FieldKind.FREE_TEXT,
            message="Chance that a cell starts filled (0-100):",
            default=50,
            when=is_map_type("Cellular"),
            validate=_percentage("Probability"),
            filter=to_percentage,
            depends_on=("type",),
        ),
        FieldSpec(
            name="iterations",
            kind=FieldKind.FREE_TEXT,
            message="How many smoothing passes?",
            default=4,
            when=is_map_type("Cellular"),
            validate=_whole_number("Iterations"),
            filter=to_integer,
            depends_on=("type",),
        ),
    ]

    issues = check_field_order(fields)
    if issues:
        raise ValueError("Invalid field order: " + " ".join(issues))
    return fields
