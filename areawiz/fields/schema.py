"""Field specifications: declarative description of one configurable value.

Every callable on a FieldSpec receives a read-only view of the answers
resolved so far and nothing else. Which answers it may read is declared in
`depends_on`; see areawiz.utils.ordering for the declaration-order check.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from areawiz.utils.validator import is_yes_no, to_bool


class FieldKind(str, Enum):
    FREE_TEXT = "free_text"
    SINGLE_CHOICE = "single_choice"
    BOOLEAN_CONFIRM = "boolean_confirm"


@dataclass(frozen=True)
class Selectable:
    """A choice the operator can pick."""
    label: str


@dataclass(frozen=True)
class GroupLabel:
    """A non-selectable heading grouping the choices that follow it."""
    text: str


Choice = Selectable | GroupLabel


@dataclass(frozen=True)
class Valid:
    pass


@dataclass(frozen=True)
class Invalid:
    message: str


ValidationResult = Valid | Invalid

VALID = Valid()


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    message: str | Callable[[Mapping], str]
    default: Any = None
    choices: tuple = ()
    when: Callable[[Mapping], bool] | None = None
    validate: Callable[[Any, Mapping], ValidationResult] | None = None
    filter: Callable[[Any], Any] | None = None
    depends_on: tuple = ()
    internal: bool = False  # hidden from the settings review

    def __post_init__(self):
        if self.kind is FieldKind.SINGLE_CHOICE and not self.selectable_labels():
            raise ValueError(f"Field '{self.name}' needs at least one selectable choice.")
        if self.kind is not FieldKind.SINGLE_CHOICE and self.choices:
            raise ValueError(f"Field '{self.name}' is not a choice field but declares choices.")

    def selectable_labels(self) -> list[str]:
        return [c.label for c in self.choices if isinstance(c, Selectable)]

    def is_visible(self, answers: Mapping) -> bool:
        if self.when is None:
            return True
        return bool(self.when(answers))

    def render_message(self, answers: Mapping) -> str:
        if callable(self.message):
            return self.message(answers)
        return self.message

    def resolve_default(self, answers: Mapping) -> Any:
        if callable(self.default):
            return self.default(answers)
        return self.default

    def check(self, raw: Any, answers: Mapping) -> ValidationResult:
        """Run the kind-level rules, then the field's own validator."""
        if self.kind is FieldKind.SINGLE_CHOICE and raw not in self.selectable_labels():
            return Invalid(f"Choose one of: {', '.join(self.selectable_labels())}.")
        if self.kind is FieldKind.BOOLEAN_CONFIRM and not is_yes_no(raw):
            return Invalid("Please answer yes or no.")
        if self.validate is None:
            return VALID
        return self.validate(raw, answers)

    def coerce(self, raw: Any) -> Any:
        """Turn validated raw input into the typed value stored for this field."""
        value = to_bool(raw) if self.kind is FieldKind.BOOLEAN_CONFIRM else raw
        if self.filter is None:
            return value
        return self.filter(value)
