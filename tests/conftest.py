from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from todostate.store import TodoStore

START = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def store() -> TodoStore:
    """Store with predictable ids (todo-1, todo-2, ...) and a clock ticking one minute per todo"""
    counter = itertools.count(1)
    minutes = itertools.count()
    return TodoStore(
        id_factory=lambda: f"todo-{next(counter)}",
        clock=lambda: START + timedelta(minutes=next(minutes)),
    )


@pytest.fixture
def notifications(store: TodoStore) -> list[int]:
    """Records the store's total count every time it notifies"""
    seen: list[int] = []
    store.subscribe(lambda: seen.append(store.total_count))
    return seen
