"""Built-in Arena generator: one open rectangle of rooms inside an empty border."""

from areawiz.generators.base import GenerationResult, UnsupportedMapTypeError
from areawiz.utils.formatter import build_area_document, render_graphic, write_area


def generate(options: dict, preview: bool) -> GenerationResult:
    """Lay out an Arena map from the resolved options.

    Only the "Arena" map type is supported; configure another generator for
    the rest. Nothing is written unless writeToFile is set outside preview
    mode or the returned build callback is called with True.
    """
    map_type = options.get("type")
    if map_type != "Arena":
        raise UnsupportedMapTypeError(
            f"The built-in generator only supports 'Arena', not {map_type!r}. "
            "Set 'generator' in config.yaml to use another one."
        )

    width = options["width"]
    height = options["height"]
    rooms = {
        (x, y)
        for y in range(1, height - 1)
        for x in range(1, width - 1)
    }
    graphic = render_graphic(width, height, rooms)

    def build(commit: bool):
        document = build_area_document(options, rooms)
        if not commit:
            return document
        return write_area(document)

    if options.get("writeToFile") and not preview:
        build(True)

    return GenerationResult(graphic=graphic, build=build, rooms=rooms)
