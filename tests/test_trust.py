import pytest

from communitree.core.enums import TrustPointAction, TrustTier
from communitree.core.trust import (
    apply_delta,
    calculate_trust_points,
    clamp_points,
    get_trust_point_delta,
    get_trust_tier,
    has_sufficient_trust_points,
    negative_actions,
    positive_actions,
    recommendations,
    rsvp_warning_message,
    should_show_rsvp_warning,
    trust_status,
)


def test_deltas():
    assert get_trust_point_delta(TrustPointAction.ORGANIZE_EVENT) == 20
    assert get_trust_point_delta("ATTEND_EVENT") == 5
    assert get_trust_point_delta("NO_SHOW") == -10
    with pytest.raises(ValueError):
        get_trust_point_delta("BRIBE_MODERATOR")


def test_clamping():
    assert calculate_trust_points(95, TrustPointAction.ORGANIZE_EVENT) == 100
    assert calculate_trust_points(5, TrustPointAction.NO_SHOW) == 0
    assert apply_delta(50, 0) == 50
    assert clamp_points(-3) == 0
    assert clamp_points(130) == 100


def test_organize_no_show_verify_scenario():
    points = 75
    points = calculate_trust_points(points, TrustPointAction.ORGANIZE_EVENT)
    assert points == 95
    points = calculate_trust_points(points, TrustPointAction.NO_SHOW)
    assert points == 85
    points = calculate_trust_points(points, TrustPointAction.VERIFY_IDENTITY)
    assert points == 95
    assert get_trust_tier(points) == TrustTier.ELITE


@pytest.mark.parametrize(
    ("points", "tier"),
    [
        (0, TrustTier.NEW),
        (19, TrustTier.NEW),
        (20, TrustTier.BRONZE),
        (49, TrustTier.BRONZE),
        (50, TrustTier.SILVER),
        (70, TrustTier.HIGH),
        (89, TrustTier.HIGH),
        (90, TrustTier.ELITE),
        (100, TrustTier.ELITE),
    ],
)
def test_tier_boundaries(points, tier):
    assert get_trust_tier(points) == tier


def test_rsvp_eligibility_and_warning():
    assert has_sufficient_trust_points(20)
    assert not has_sufficient_trust_points(19)
    assert has_sufficient_trust_points(40, required=40)

    assert not should_show_rsvp_warning(30)
    assert should_show_rsvp_warning(29)
    assert rsvp_warning_message(60) is None
    assert "low" in rsvp_warning_message(25)
    assert "at least 20" in rsvp_warning_message(12)


def test_trust_status():
    status = trust_status(8)
    assert status.tier == TrustTier.NEW
    assert status.is_low and status.is_critical
    assert status.points_to_safe == 22
    assert status.points_to_max == 92
    assert status.percentage == 8.0

    healthy = trust_status(60)
    assert not healthy.is_low
    assert healthy.points_to_safe == 0


def test_recommendations():
    assert recommendations(50) == []
    assert recommendations(17) == ["Attend one event to reach safe level"]
    assert recommendations(10) == ["Volunteer with an NGO or attend 2-3 events"]
    assert recommendations(0) == ["Organize an event or complete multiple volunteer activities"]


def test_action_catalogue_split_by_sign():
    positives = positive_actions()
    negatives = negative_actions()
    assert {a.action for a in negatives} == {TrustPointAction.NO_SHOW, TrustPointAction.REPORT_VIOLATION}
    assert len(positives) + len(negatives) == len(TrustPointAction)
    assert all(a.points > 0 for a in positives)
