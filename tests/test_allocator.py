import copy
import sys
from datetime import date
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from task_allocator.engine import (
    UNASSIGNED_REASON,
    AllocationError,
    Allocator,
    reset_workloads,
)
from task_allocator.engine import allocator as allocator_module
from task_allocator.models import Member, Task


def make_task(task_id, skills, hours=8, priority="high", deadline=date(2025, 2, 15)):
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        required_skills=skills,
        estimated_hours=hours,
        priority=priority,
        deadline=deadline,
    )


def team():
    return [
        Member(
            id="1",
            name="Alice",
            max_capacity=40,
            skill_levels={"React": 8, "JavaScript": 9, "CSS": 7},
        ),
        Member(
            id="2",
            name="Bob",
            max_capacity=35,
            skill_levels={"Python": 9, "Django": 8, "PostgreSQL": 7},
        ),
        Member(id="3", name="Carol", max_capacity=30, skill_levels={"CSS": 8, "Figma": 8}),
    ]


def backlog():
    return [
        make_task("t1", ["React", "JavaScript"], hours=8),
        make_task("t2", ["CSS"], hours=12, priority="medium"),
        make_task("t3", ["Python"], hours=20, priority="low"),
        make_task("t4", ["Python", "Django"], hours=20, deadline=date(2025, 1, 1)),
        make_task("t5", ["Rust"], hours=4),
        make_task("t6", ["CSS", "React"], hours=30, priority="medium"),
    ]


def test_example_assignment():
    members = team()
    task = make_task("t1", ["React", "JavaScript"], hours=8)
    records = Allocator.allocate(members, [task])

    assert records[0].member_id == "1"
    assert records[0].member_name == "Alice"
    assert records[0].match_score == 85
    assert records[0].estimated_hours == 8
    assert records[0].reason is None
    assert members[0].current_workload == 8
    assert task.assigned_to == "1"


def test_priority_outranks_deadline():
    a = make_task("A", ["React"], priority="low", deadline=date(2025, 1, 1))
    b = make_task("B", ["React"], priority="high", deadline=date(2025, 12, 31))
    assert [t.id for t in Allocator.order_tasks([a, b])] == ["B", "A"]

    records = Allocator.allocate(team(), [a, b])
    assert [r.task_id for r in records] == ["B", "A"]


def test_deadline_orders_equal_priority_and_ties_keep_input_order():
    late = make_task("late", ["React"], deadline=date(2025, 3, 1))
    early = make_task("early", ["React"], deadline=date(2025, 1, 1))
    twin = make_task("twin", ["React"], deadline=date(2025, 3, 1))
    ordered = Allocator.order_tasks([late, early, twin])
    assert [t.id for t in ordered] == ["early", "late", "twin"]


def test_unmatched_skill_is_reported_unassigned():
    task = make_task("t5", ["Rust"])
    records = Allocator.allocate(team(), [task])

    record = records[0]
    assert record.member_id is None
    assert record.member_name == "Unassigned"
    assert record.match_score == 0
    assert record.reason == UNASSIGNED_REASON
    assert not record.assigned
    assert task.assigned_to is None
    assert record.to_dict()["reason"] == UNASSIGNED_REASON


def test_capacity_excludes_best_scorer():
    expert = Member(id="1", name="Expert", max_capacity=10, skill_levels={"React": 10})
    novice = Member(id="2", name="Novice", max_capacity=40, skill_levels={"React": 3})
    records = Allocator.allocate([expert, novice], [make_task("t1", ["React"], hours=12)])

    assert records[0].member_id == "2"
    assert records[0].match_score == 30
    assert expert.current_workload == 0


def test_exact_fit_is_allowed():
    member = Member(id="1", name="Alice", max_capacity=8, skill_levels={"React": 8})
    records = Allocator.allocate([member], [make_task("t1", ["React"], hours=8)])
    assert records[0].member_id == "1"
    assert member.current_workload == 8


def test_no_capacity_left_leaves_task_unassigned():
    member = Member(id="1", name="Alice", max_capacity=10, skill_levels={"React": 8})
    first = make_task("t1", ["React"], hours=8, deadline=date(2025, 1, 1))
    second = make_task("t2", ["React"], hours=8, deadline=date(2025, 1, 2))
    records = Allocator.allocate([member], [second, first])

    assert [r.member_id for r in records] == ["1", None]
    assert records[1].reason == UNASSIGNED_REASON
    assert second.assigned_to is None


def test_first_member_wins_ties():
    twin_a = Member(id="a", name="A", max_capacity=40, skill_levels={"React": 8})
    twin_b = Member(id="b", name="B", max_capacity=40, skill_levels={"React": 8})
    member, best = Allocator.select_member([twin_a, twin_b], make_task("t1", ["React"]))
    assert member is twin_a
    assert best == 80


def test_committed_workload_affects_later_tasks():
    twin_a = Member(id="a", name="A", max_capacity=40, skill_levels={"React": 8})
    twin_b = Member(id="b", name="B", max_capacity=40, skill_levels={"React": 8})
    tasks = [
        make_task("t1", ["React"], hours=20, deadline=date(2025, 1, 1)),
        make_task("t2", ["React"], hours=20, deadline=date(2025, 1, 2)),
    ]
    records = Allocator.allocate([twin_a, twin_b], tasks)

    assert [r.member_id for r in records] == ["a", "b"]
    assert [r.match_score for r in records] == [80, 80]


def test_allocate_resets_prior_workload():
    members = team()
    members[0].current_workload = 39
    records = Allocator.allocate(members, [make_task("t1", ["React"], hours=8)])
    assert records[0].member_id == "1"
    assert members[0].current_workload == 8


def test_workload_never_exceeds_capacity():
    members = team()
    Allocator.allocate(members, backlog())
    for member in members:
        assert member.current_workload <= member.max_capacity


def test_backlog_outcome():
    members = team()
    records = Allocator.allocate(members, backlog())

    assert [r.task_id for r in records] == ["t4", "t1", "t5", "t2", "t6", "t3"]
    assert [r.member_id for r in records] == ["2", "1", None, "3", "1", None]
    assert [r.match_score for r in records] == [85, 85, 0, 80, 71, 0]
    assert [m.current_workload for m in members] == [38, 20, 12]


def test_allocation_is_deterministic():
    members, tasks = team(), backlog()
    first = Allocator.run(copy.deepcopy(members), copy.deepcopy(tasks))
    second = Allocator.run(copy.deepcopy(members), copy.deepcopy(tasks))
    assert first.to_dict() == second.to_dict()


def test_reset_then_allocate_reproduces_first_run():
    members, tasks = team(), backlog()
    first = Allocator.run(members, tasks).to_dict()

    reset_workloads(members, tasks)
    assert all(m.current_workload == 0 for m in members)
    assert all(t.assigned_to is None for t in tasks)

    assert Allocator.run(members, tasks).to_dict() == first


def test_run_packages_stats_and_members():
    report = Allocator.run(team(), backlog())
    assert report.stats.total_tasks == 6
    assert report.stats.assigned_tasks == 4
    assert report.stats.unassigned_tasks == 2
    assert report.stats.avg_match_score == 80
    assert report.stats.efficiency == 67
    assert [s.utilization for s in report.member_summaries] == [95, 57, 40]


def test_non_finite_score_fails_the_run():
    member = Member(id="1", name="Alice", max_capacity=40, skill_levels={"React": 8})
    member.skill_levels["React"] = float("inf")
    with pytest.raises(AllocationError) as info:
        Allocator.run([member], [make_task("t1", ["React"])])
    assert info.value.task_id == "t1"


def test_reporting_failure_fails_the_run():
    members = team()
    members[2].max_capacity = float("nan")
    with pytest.raises(AllocationError):
        Allocator.run(members, [make_task("t1", ["React"])])


def test_unexpected_error_is_wrapped(monkeypatch):
    def broken(member, task):
        raise KeyError("boom")

    monkeypatch.setattr(allocator_module, "score", broken)
    with pytest.raises(AllocationError):
        Allocator.run(team(), [make_task("t1", ["React"])])
