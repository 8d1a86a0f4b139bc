"""Tests for smart job assignment scoring."""

from datetime import datetime

import pytest

from conftest import make_job, make_staff
from fieldplanner.config import AssignmentWeights
from fieldplanner.domain.repositories import JobRepository
from fieldplanner.engine.assignment import (
    assign_best_staff,
    get_best_staff_suggestion,
    get_smart_job_suggestions,
    shift_hours,
)

SANDTON = (-26.1075, 28.0567)
MORNING = datetime(2025, 9, 3, 10, 0)


def test_staff_at_job_location_with_no_work():
    """Zero distance, same zone, no jobs: only the zone bonus remains."""
    member = make_staff("ann", *SANDTON)
    [suggestion] = get_smart_job_suggestions(SANDTON, [member], [], now=MORNING)

    assert suggestion.staff_member is member
    assert suggestion.distance == 0
    assert suggestion.travel_time == 0
    assert suggestion.priority == -10
    assert suggestion.reason == "Distance: 0.0km, Travel: 0min - Available now"


def test_priority_formula():
    """Test the priority score built from distance, workload, travel time and zone."""
    member = make_staff("ann", -26.1075, 28.1567)
    jobs = [make_job("j1", assigned_to="ann", category="Leak Detection")]
    [s] = get_smart_job_suggestions(SANDTON, [member], jobs, now=MORNING)

    expected = 2 * s.distance + 5 * 1 + 0.5 * s.travel_time - 10
    assert s.priority == pytest.approx(expected)
    assert s.travel_time == pytest.approx(s.distance / 40 * 60)
    assert 9 < s.distance < 11


def test_same_zone_sorts_ahead_by_exactly_ten():
    """Equal distance either side of the Johannesburg North/South boundary."""
    job_location = (-26.2, 28.05)  # southern edge of Johannesburg North
    north = make_staff("north", -26.15, 28.05)
    south = make_staff("south", -26.25, 28.05)

    suggestions = get_smart_job_suggestions(job_location, [south, north], [], now=MORNING)

    assert [s.staff_member.id for s in suggestions] == ["north", "south"]
    assert suggestions[0].distance == pytest.approx(suggestions[1].distance)
    assert suggestions[1].priority - suggestions[0].priority == pytest.approx(10)


def test_available_now_reason():
    """Test the reason text for an idle nearby staff member."""
    member = make_staff("ann", -26.0, 28.0)
    jobs = [make_job("done", assigned_to="ann", status="completed")]
    [s] = get_smart_job_suggestions(SANDTON, [member], jobs, now=MORNING)
    assert s.workload.current_jobs == 0
    assert "Available now" in s.reason


def test_workload_reason_and_next_available():
    """Test that the reason lists active jobs and the next free time."""
    member = make_staff("ann", *SANDTON)
    jobs = [
        make_job("j1", assigned_to="ann", category="Geyser Replacement"),
        make_job("j2", assigned_to="ann", category="Something Else", status="in_progress"),
        make_job("j3", assigned_to="ann", category="Drain Blockage", status="completed"),
        make_job("j4", assigned_to="bob", category="Drain Blockage"),
    ]
    [s] = get_smart_job_suggestions(SANDTON, [member], jobs, now=MORNING)

    assert s.workload.current_jobs == 2
    assert s.workload.hours_remaining == 6.5
    assert s.workload.next_available == datetime(2025, 9, 3, 16, 30)
    assert s.reason.endswith(" - 2 active jobs, next available: 16:30")
    assert s.priority == pytest.approx(10 - 10)


def test_outside_shift_penalty():
    """Test that staff outside their shift are penalized."""
    evening = datetime(2025, 9, 3, 18, 0)
    normal = make_staff("normal", *SANDTON)
    late = make_staff("late", *SANDTON, working_late_shift=True)

    suggestions = get_smart_job_suggestions(SANDTON, [normal, late], [], now=evening)

    assert [s.staff_member.id for s in suggestions] == ["late", "normal"]
    assert suggestions[0].priority == -10
    assert suggestions[1].priority == 10
    assert "(Outside shift hours)" in suggestions[1].reason
    assert "(Outside shift hours)" not in suggestions[0].reason


def test_custom_shift_times():
    """Test that stored shift times override the default shift."""
    member = make_staff("early", *SANDTON, shift_start_time="07:00", shift_end_time="15:30")
    assert shift_hours(member) == (7, 15)

    [s] = get_smart_job_suggestions(SANDTON, [member], [], now=datetime(2025, 9, 3, 6, 59))
    assert "(Outside shift hours)" in s.reason
    [s] = get_smart_job_suggestions(SANDTON, [member], [], now=datetime(2025, 9, 3, 7, 0))
    assert "(Outside shift hours)" not in s.reason


def test_shift_defaults_and_bad_values():
    """Test shift fallbacks for late-shift staff and malformed times."""
    assert shift_hours(make_staff("a")) == (5, 17)
    assert shift_hours(make_staff("b", working_late_shift=True)) == (5, 19)
    assert shift_hours(make_staff("c", shift_start_time="soon", shift_end_time="")) == (5, 17)


def test_ineligible_staff_excluded():
    """Test that non-field roles and staff without coordinates are excluded."""
    roster = [
        make_staff("admin", *SANDTON, role="admin"),
        make_staff("super", *SANDTON, role="supervisor"),
        make_staff("nowhere"),
        make_staff("field", -26.0, 28.0),
    ]
    suggestions = get_smart_job_suggestions(SANDTON, roster, [], now=MORNING)
    assert [s.staff_member.id for s in suggestions] == ["field"]


@pytest.mark.parametrize(
    "roster",
    [
        [],
        [make_staff("admin", *SANDTON, role="admin")],
        [make_staff("nowhere"), make_staff("half", lat=-26.0)],
    ],
)
def test_best_suggestion_none_without_eligible_staff(roster):
    """Test that no eligible staff gives no best suggestion."""
    assert get_best_staff_suggestion(SANDTON, roster, [], now=MORNING) is None


def test_best_suggestion_is_first():
    """Test that the best suggestion is the top-ranked one."""
    near = make_staff("near", -26.11, 28.06)
    far = make_staff("far", -26.3, 28.2)
    best = get_best_staff_suggestion(SANDTON, [far, near], [], now=MORNING)
    assert best.staff_member is near


def test_equal_priority_keeps_roster_order():
    """Test that ties keep the roster order."""
    roster = [make_staff(name, -26.0, 28.0) for name in ("c", "a", "b")]
    suggestions = get_smart_job_suggestions(SANDTON, roster, [], now=MORNING)
    assert [s.staff_member.id for s in suggestions] == ["c", "a", "b"]

    reversed_suggestions = get_smart_job_suggestions(SANDTON, roster[::-1], [], now=MORNING)
    assert [s.staff_member.id for s in reversed_suggestions] == ["b", "a", "c"]


def test_custom_weights():
    """Test scoring with configured weights."""
    weights = AssignmentWeights(distance=0, workload=0, travel_time=0, same_zone_bonus=0, outside_shift_penalty=0)
    roster = [make_staff("far", -33.9, 18.4), make_staff("near", *SANDTON)]
    suggestions = get_smart_job_suggestions(SANDTON, roster, [], now=MORNING, weights=weights)
    assert [s.priority for s in suggestions] == [0, 0]
    assert [s.staff_member.id for s in suggestions] == ["far", "near"]


def test_inputs_are_not_mutated():
    """Test that ranking leaves staff and jobs untouched."""
    member = make_staff("ann", *SANDTON)
    jobs = [make_job("j1", assigned_to="ann")]
    get_smart_job_suggestions(SANDTON, [member], jobs, now=MORNING)
    assert jobs[0].assigned_to == "ann"
    assert member.latitude == SANDTON[0]


@pytest.mark.integration
def test_assign_best_staff_persists(db_session):
    """Test that the best staff member is stored on the job."""
    db_session.add_all([
        make_staff("far", -26.3, 28.2),
        make_staff("near", -26.11, 28.06),
        make_job("target", latitude=SANDTON[0], longitude=SANDTON[1], category="Leak Detection"),
    ])
    db_session.commit()

    best = assign_best_staff(db_session, "target", now=MORNING, assigned_by="admin-1")

    assert best.staff_member.id == "near"
    stored = JobRepository.get_by_id(db_session, "target")
    assert stored.assigned_to == "near"
    assert stored.assigned_by == "admin-1"


@pytest.mark.integration
def test_assign_best_staff_without_coordinates(db_session):
    """Test that a job without coordinates is left unassigned."""
    db_session.add_all([make_staff("near", *SANDTON), make_job("target")])
    db_session.commit()

    assert assign_best_staff(db_session, "target", now=MORNING) is None
    assert JobRepository.get_by_id(db_session, "target").assigned_to is None


def test_assign_best_staff_unknown_job(db_session):
    """Test that assigning a missing job raises LookupError."""
    with pytest.raises(LookupError):
        assign_best_staff(db_session, "missing", now=MORNING)
