"""Weak-area listing and day-by-day revision plans for exam preparation."""

from __future__ import annotations

import math
from collections.abc import Sequence

from pydantic import BaseModel, Field

from studyctl.domain.lifecycle import PyqStatus, TopicStatus
from studyctl.domain.state import StateTree

# Upper bound on plan length; every day is materialized as a PlanDay.
MAX_PLAN_DAYS = 365


class WeakTopic(BaseModel):
    model_config = {"frozen": True}

    subject: str
    unit: str
    topic_id: str
    topic: str
    status: str


class WeakPyq(BaseModel):
    model_config = {"frozen": True}

    subject: str
    pyq_id: str
    question: str
    year: str
    status: str


class PlanDay(BaseModel):
    model_config = {"frozen": True}

    day: int
    topics: list[WeakTopic] = Field(default_factory=list)
    pyqs: list[WeakPyq] = Field(default_factory=list)


def weak_topics(tree: StateTree) -> list[WeakTopic]:
    """Every topic not yet completed, in subject/unit/topic order."""
    return [
        WeakTopic(
            subject=code,
            unit=unit_name,
            topic_id=topic.id,
            topic=topic.name,
            status=topic.effective_status.value,
        )
        for code, syllabus in tree.syllabus.items()
        for unit_name, unit in syllabus.items()
        for topic in unit.topics
        if topic.effective_status != TopicStatus.COMPLETED
    ]


def weak_pyqs(tree: StateTree) -> list[WeakPyq]:
    """Every PYQ item not yet mastered, in subject/item order."""
    return [
        WeakPyq(
            subject=code,
            pyq_id=item.id,
            question=item.question,
            year=item.year,
            status=item.effective_status.value,
        )
        for code, questions in tree.pyq.items()
        for item in questions
        if item.effective_status != PyqStatus.MASTERED
    ]


def _chunks[T](items: Sequence[T], days: int) -> list[list[T]]:
    per_day = math.ceil(len(items) / days)
    return [list(items[i * per_day : (i + 1) * per_day]) for i in range(days)]


def revision_plan(tree: StateTree, days: int) -> list[PlanDay]:
    """Spread weak topics and PYQs over *days* in order.

    Each day takes up to ``ceil(n / days)`` of each kind, so later days
    may be lighter or empty.

    Raises:
        ValueError: *days* is outside ``1..MAX_PLAN_DAYS``.
    """
    if days < 1:
        msg = f"days must be at least 1, got {days}"
        raise ValueError(msg)
    if days > MAX_PLAN_DAYS:
        msg = f"days must be at most {MAX_PLAN_DAYS}, got {days}"
        raise ValueError(msg)
    topic_days = _chunks(weak_topics(tree), days)
    pyq_days = _chunks(weak_pyqs(tree), days)
    return [
        PlanDay(day=i + 1, topics=topic_days[i], pyqs=pyq_days[i]) for i in range(days)
    ]
