"""LangGraph StateGraph definition for the settings review / generation preview / commit gate.

Operator-facing collaborators are passed in through the run config:
    confirm(question) -> bool, generate(options, preview) -> GenerationResult,
    show(text) -> None, and `hidden`, the answer names left out of the review.
"""

from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, StateGraph

from areawiz.state import GateState, Outcome
from areawiz.utils.formatter import render_preview, render_settings, settings_summary


def _collaborators(config: RunnableConfig) -> dict:
    return (config or {}).get("configurable", {})


def _generator_options(answers: dict) -> dict:
    """Options handed to the generator in preview mode.

    The generator expects the dug percentage under `roomDugPercentage`.
    """
    options = {**answers, "writeToFile": False}
    if "dugPercentage" in answers:
        options["roomDugPercentage"] = answers["dugPercentage"]
    return options


def _settings_review(state: GateState, config: RunnableConfig) -> dict:
    """Show the resolved settings (minus internal fields) and ask for confirmation."""
    c = _collaborators(config)
    summary = settings_summary(state["answers"], c.get("hidden", frozenset()))
    c["show"]("\n--- Area settings ---\n" + render_settings(summary))
    confirmed = bool(c["confirm"]("Are these settings correct?"))
    return {"settings_confirmed": confirmed, "status": "settings_review"}


def _generation_preview(state: GateState, config: RunnableConfig) -> dict:
    """Generate a preview map, show it with its legend, and ask whether to build it.

    Generator failures propagate unchanged.
    """
    c = _collaborators(config)
    preview = c["generate"](_generator_options(state["answers"]), True)
    c["show"]("\n--- Map preview ---\n" + render_preview(preview.graphic))
    confirmed = bool(c["confirm"]("Build this area?"))
    return {
        "preview": preview,
        "commit_confirmed": confirmed,
        "status": "generation_preview",
    }


def _commit(state: GateState, config: RunnableConfig) -> dict:
    """Run the generator's build callback for real. The only persistent side effect."""
    output = state["preview"].build(True)
    return {"status": "committed", "output_path": output}


def _abort(state: GateState, config: RunnableConfig) -> dict:
    return {"status": "aborted"}


def _route_after_settings(state: GateState) -> str:
    return "generation_preview" if state.get("settings_confirmed") else "abort"


def _route_after_preview(state: GateState) -> str:
    return "commit" if state.get("commit_confirmed") else "abort"


# --- Build the graph ---

workflow = StateGraph(GateState)

workflow.add_node("settings_review", _settings_review)
workflow.add_node("generation_preview", _generation_preview)
workflow.add_node("commit", _commit)
workflow.add_node("abort", _abort)

workflow.set_entry_point("settings_review")

workflow.add_conditional_edges(
    "settings_review",
    _route_after_settings,
    {
        "generation_preview": "generation_preview",
        "abort": "abort",
    },
)
workflow.add_conditional_edges(
    "generation_preview",
    _route_after_preview,
    {
        "commit": "commit",
        "abort": "abort",
    },
)

workflow.add_edge("commit", END)
workflow.add_edge("abort", END)

graph = workflow.compile()


def initial_state(answers: dict) -> GateState:
    return {
        "answers": dict(answers),
        "settings_confirmed": None,
        "commit_confirmed": None,
        "preview": None,
        "status": "pending",
        "output_path": None,
    }


def run_gate(answers: dict, confirm, generate, show=print, hidden=frozenset()) -> tuple[Outcome, GateState]:
    """Run the full confirm/commit gate over resolved answers.

    Returns the outcome and the final gate state.
    """
    final_state = graph.invoke(
        initial_state(answers),
        config={
            "configurable": {
                "confirm": confirm,
                "generate": generate,
                "show": show,
                "hidden": frozenset(hidden),
            }
        },
    )
    outcome = Outcome.COMMITTED if final_state["status"] == "committed" else Outcome.ABORTED
    return outcome, final_state
