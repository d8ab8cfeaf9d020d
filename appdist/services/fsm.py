from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from appdist.core.result import Err, Ok, Result

S = TypeVar("S")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class StepAdvance(Generic[S]):
    session: S


@dataclass(frozen=True, slots=True)
class StepFinish(Generic[S]):
    session: S


StepOutcome = StepAdvance[S] | StepFinish[S]
StepHandler = Callable[[S], Result[StepOutcome[S], E]]


def advance(session: S) -> StepAdvance[S]:
    return StepAdvance(session=session)


def finish(session: S) -> StepFinish[S]:
    return StepFinish(session=session)


def run_state_machine(
    *,
    initial_state: S,
    get_step: Callable[[S], str],
    handlers: Mapping[str, StepHandler[S, E]],
) -> Result[S, E]:
    """Drive ``initial_state`` through ``handlers`` until one finishes.

    The handler for the current step decides the next session. The first
    Err stops the machine and is returned as-is.

    Raises:
        KeyError: If a session reaches a step with no handler.
    """
    current = initial_state

    while True:
        step = get_step(current)
        handler = handlers.get(step)
        if handler is None:
            raise KeyError(f"no handler for step: {step}")

        outcome = handler(current)
        if isinstance(outcome, Err):
            return outcome

        if isinstance(outcome.value, StepFinish):
            return Ok(outcome.value.session)

        current = outcome.value.session
