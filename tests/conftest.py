"""Shared fixtures for the areawiz test suite."""

import pytest
from unittest.mock import MagicMock, patch

from areawiz.fields.catalog import build_fields
from areawiz.generators.base import GenerationResult

# Scripted answer meaning "press enter and accept the default"
DEFAULT = object()


class ScriptedPrompter:
    """Prompter answering from a per-field script instead of a terminal.

    Each field maps to the raw answers given, in order, every time it is
    asked. Asking a field with no answers left fails the test.
    """

    def __init__(self, script: dict):
        self._script = {name: list(answers) for name, answers in script.items()}
        self.asked = []  # field names, once per ask
        self.requests = {}  # field name -> last PromptRequest
        self.warnings = []

    def ask(self, request):
        self.asked.append(request.name)
        self.requests[request.name] = request
        remaining = self._script.get(request.name)
        if not remaining:
            pytest.fail(f"Unexpected prompt for field '{request.name}'.")
        answer = remaining.pop(0)
        if answer is DEFAULT:
            return request.default
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def warn(self, message):
        self.warnings.append(message)

    def confirm(self, question):
        pytest.fail(f"Unexpected confirmation: {question}")


@pytest.fixture
def test_config(tmp_path):
    return {
        "output_dir": str(tmp_path / "areas"),
        "generator": "areawiz.generators.arena:generate",
        "default_width": 20,
        "default_height": 20,
        "default_map_type": "Arena",
        "default_room_title": "Room",
        "default_respawn_interval": 60,
    }


@pytest.fixture
def mock_config(test_config):
    """Patch the config singleton with test-friendly values."""
    with patch("areawiz.config._config", test_config):
        yield test_config


@pytest.fixture
def fields(test_config):
    return build_fields(test_config)


@pytest.fixture
def arena_script():
    """Answers for the happy-path Arena session."""
    return {
        "areaTitle": ["Keep"],
        "customizeAreaInfo": ["n"],
        "genericRoomTitle": [DEFAULT],
        "genericRoomDesc": [DEFAULT],
        "width": ["20"],
        "height": ["20"],
        "type": ["Arena"],
    }


@pytest.fixture
def digger_script():
    """Answers for a Digger session, including rejected range answers."""
    return {
        "areaTitle": ["Dark Keep"],
        "customizeAreaInfo": [DEFAULT],
        "genericRoomTitle": ["Dusty hall"],
        "genericRoomDesc": [DEFAULT],
        "width": ["30"],
        "height": ["20"],
        "type": ["Digger"],
        "roomWidthMaximum": [DEFAULT],
        "roomWidthMinimum": [DEFAULT],
        "roomHeightMaximum": ["25", "8"],
        "roomHeightMinimum": ["8", "4.7"],
        "corridorLengthMaximum": [DEFAULT],
        "corridorLengthMinimum": ["10", "2"],
        "dugPercentage": ["abc", "25"],
        "timeLimit": [DEFAULT],
    }


@pytest.fixture
def mock_generator():
    """Generator double whose build callback records its calls."""
    build = MagicMock(return_value="/tmp/areas/keep")
    generate = MagicMock(
        return_value=GenerationResult(graphic="###\n#.#\n###", build=build, rooms={(1, 1)})
    )
    return generate, build


ScriptedPrompter.DEFAULT = DEFAULT


@pytest.fixture
def prompter_cls():
    """The ScriptedPrompter class; ScriptedPrompter.DEFAULT accepts a field's default."""
    return ScriptedPrompter
