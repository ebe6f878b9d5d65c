"""Entry point: asks the area questions, then runs the confirm/commit gate."""

import argparse
import sys

from areawiz.config import get_config
from areawiz.fields.catalog import build_fields
from areawiz.fields.schema import FieldKind, GroupLabel, Selectable
from areawiz.generators.base import load_generator
from areawiz.graph import run_gate
from areawiz.resolver import PromptAborted, PromptRequest, resolve
from areawiz.state import Outcome

__version__ = "0.1.0"


class TerminalPrompter:
    """Asks fields on the terminal. An empty answer accepts the default."""

    def __init__(self, input_fn=input):
        self._input = input_fn

    def _read(self, prompt: str) -> str:
        try:
            return self._input(prompt).strip()
        except (EOFError, KeyboardInterrupt):
            print()
            raise PromptAborted() from None

    def ask(self, request: PromptRequest):
        default = request.default

        if request.kind is FieldKind.BOOLEAN_CONFIRM:
            hint = "Y/n" if default else "y/N"
            answer = self._read(f"{request.message} ({hint}): ")
            return answer if answer else bool(default)

        if request.kind is FieldKind.SINGLE_CHOICE:
            print(request.message)
            labels = []
            for choice in request.choices:
                if isinstance(choice, GroupLabel):
                    print(f"  -- {choice.text} --")
                elif isinstance(choice, Selectable):
                    labels.append(choice.label)
                    print(f"  {len(labels)}. {choice.label}")
            suffix = f" [{default}]" if default is not None else ""
            answer = self._read(f"Your choice (number or name){suffix}: ")
            if not answer and default is not None:
                return default
            if answer.isdigit() and 1 <= int(answer) <= len(labels):
                return labels[int(answer) - 1]
            for label in labels:
                if answer.lower() == label.lower():
                    return label
            return answer

        suffix = f" [{default}]" if default is not None else ""
        answer = self._read(f"{request.message}{suffix} ")
        if not answer and default is not None:
            return default
        return answer

    def warn(self, message: str) -> None:
        print(f">> {message}", file=sys.stderr)

    def confirm(self, question: str) -> bool:
        """Yes/no question defaulting to no. Ctrl+C / Ctrl+D count as no."""
        while True:
            try:
                answer = self._read(f"{question} (y/N): ").lower()
            except PromptAborted:
                return False
            if answer in ("y", "yes"):
                return True
            if answer in ("", "n", "no"):
                return False
            print("Please answer yes or no.")


def run(prompter=None, confirm=None, generate=None) -> Outcome:
    """Run one full session: resolve every field, review, preview, commit.

    Args:
        prompter: Asks one field at a time. Defaults to the terminal.
        confirm: Yes/no callable for the two reviews. Defaults to prompter.confirm.
        generate: Map generator. None loads the configured one.
    """
    config = get_config()
    fields = build_fields(config)
    prompter = prompter or TerminalPrompter()
    confirm = confirm or prompter.confirm

    answers = resolve(fields, prompter)
    if answers is Outcome.ABORTED:
        print("[areawiz] Session abandoned. Nothing was written.")
        return Outcome.ABORTED

    if generate is None:
        generate = load_generator(config["generator"])

    hidden = {f.name for f in fields if f.internal}
    outcome, final_state = run_gate(
        answers.as_dict(), confirm=confirm, generate=generate, hidden=hidden
    )

    if outcome is Outcome.COMMITTED:
        print(f"[areawiz] Area written to: {final_state['output_path']}")
    else:
        print("[areawiz] Aborted. Nothing was written.")
    return outcome


def main() -> None:
    """CLI entry point. Exits 0 once an area is committed, 1 otherwise."""
    parser = argparse.ArgumentParser(
        prog="areawiz",
        description="Configure, preview and build a generated area.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.parse_args()

    outcome = run()
    sys.exit(0 if outcome is Outcome.COMMITTED else 1)


if __name__ == "__main__":
    main()
