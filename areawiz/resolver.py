"""Resolver: walks field specifications in order and fills the answer accumulator.

Each field sees a ScopedAnswers view: an immutable snapshot of what has been
resolved so far, restricted to the names in the field's `depends_on`.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Protocol

from areawiz.fields.schema import Choice, FieldKind, FieldSpec, Invalid
from areawiz.state import Outcome


class AnswerOverwriteError(ValueError):
    """Raised when a field is written twice in the same session."""


class UndeclaredDependencyError(RuntimeError):
    """Raised when a field callable reads an answer it did not declare in depends_on."""

    def __init__(self, field_name: str, key: str):
        super().__init__(
            f"Field '{field_name}' read '{key}' without declaring it in depends_on."
        )
        self.field_name = field_name
        self.key = key


class PromptAborted(Exception):
    """Raised by a prompter when the operator abandons the session."""


@dataclass(frozen=True)
class PromptRequest:
    """Everything a prompter needs to ask for one field."""
    name: str
    kind: FieldKind
    message: str
    default: Any = None
    choices: tuple[Choice, ...] = ()


class Prompter(Protocol):
    def ask(self, request: PromptRequest) -> Any:
        """Return one raw answer. Raise PromptAborted to end the session."""
        ...

    def warn(self, message: str) -> None:
        """Show a validation failure before the same field is asked again."""
        ...


class Accumulator:
    """Ordered, write-once store of resolved answers for one session."""

    def __init__(self):
        self._values: dict[str, Any] = {}

    def record(self, name: str, value: Any) -> None:
        if name in self._values:
            raise AnswerOverwriteError(f"Answer '{name}' is already recorded.")
        self._values[name] = value

    def snapshot(self) -> Mapping[str, Any]:
        return MappingProxyType(dict(self._values))

    def scoped(self, field: FieldSpec) -> "ScopedAnswers":
        return ScopedAnswers(self.snapshot(), field)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __getitem__(self, name: str) -> Any:
        return self._values[name]


class ScopedAnswers(Mapping):
    """Read-only answers visible to one field.

    Skipped fields are simply absent (KeyError, or the fallback of .get).
    Names outside depends_on raise UndeclaredDependencyError.
    """

    def __init__(self, snapshot: Mapping[str, Any], field: FieldSpec):
        self._snapshot = snapshot
        self._field_name = field.name
        self._allowed = frozenset(field.depends_on)

    def __getitem__(self, key: str) -> Any:
        if key not in self._allowed:
            raise UndeclaredDependencyError(self._field_name, key)
        return self._snapshot[key]

    def __iter__(self) -> Iterator[str]:
        return (k for k in self._snapshot if k in self._allowed)

    def __len__(self) -> int:
        return sum(1 for _ in self)


def _ask_until_valid(field: FieldSpec, answers: ScopedAnswers, prompter: Prompter) -> Any:
    """Prompt for one field until its validator accepts the input; return the typed value."""
    request = PromptRequest(
        name=field.name,
        kind=field.kind,
        message=field.render_message(answers),
        default=field.resolve_default(answers),
        choices=field.choices,
    )

    while True:
        raw = prompter.ask(request)
        result = field.check(raw, answers)
        if isinstance(result, Invalid):
            prompter.warn(result.message)
            continue
        return field.coerce(raw)


def resolve(fields: list[FieldSpec], prompter: Prompter) -> Accumulator | Outcome:
    """Resolve every visible field in declared order.

    Returns the filled Accumulator, or Outcome.ABORTED if the operator
    abandoned the session mid-way.
    """
    accumulator = Accumulator()

    for field in fields:
        answers = accumulator.scoped(field)
        if not field.is_visible(answers):
            continue
        try:
            value = _ask_until_valid(field, answers, prompter)
        except PromptAborted:
            return Outcome.ABORTED
        accumulator.record(field.name, value)

    return accumulator
