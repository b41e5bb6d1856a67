"""
State Mutation Queue - Deferred updates of a scene state.

Some effect hooks are "noisy": they return a state mutation (a function
taking the scene state and returning the fields to update) instead of
acting right away. Scenes using them keep those mutations in the
`m_queue` entry of their state and execute them one per frame, oldest
first.
"""

from __future__ import annotations
from collections.abc import Callable, MutableMapping
from typing import Any


StateMutationFunction = Callable[[Any], dict[str, Any]]

QUEUE_KEY = "m_queue"


def has_state_mutation_queued(state: MutableMapping[str, Any]) -> bool:
    return len(state[QUEUE_KEY]) != 0


def queue_state_mutation(state: MutableMapping[str, Any], mutation: StateMutationFunction):
    """Queue a mutation, executed after the ones already queued."""
    state[QUEUE_KEY] = [mutation, *state[QUEUE_KEY]]


def queue_state_mutations(state: MutableMapping[str, Any], mutations: list[StateMutationFunction]):
    """Queue several mutations, executed in order after the ones already queued."""
    state[QUEUE_KEY] = [*reversed(mutations), *state[QUEUE_KEY]]


def execute_state_mutation(state: MutableMapping[str, Any]) -> dict[str, Any]:
    """Execute the oldest queued mutation (if any) and return the updated state."""
    if not has_state_mutation_queued(state):
        return state

    mutation = state[QUEUE_KEY].pop()
    return {**state, **mutation(state)}
