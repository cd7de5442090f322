from communitree.core.enums import VenueRating
from communitree.core.models import Venue
from communitree.core.venues import (
    is_venue_safe,
    rate_venue,
    rate_venue_type,
    venue_rating_badge,
    venue_rating_description,
    venue_type_description,
    with_venue_type,
)


def test_rate_venue_type():
    assert rate_venue_type("public") == VenueRating.GREEN
    assert rate_venue_type("commercial") == VenueRating.YELLOW
    assert rate_venue_type("private") == VenueRating.RED
    # unknown types get the most cautious rating
    assert rate_venue_type("rooftop") == VenueRating.RED
    assert rate_venue_type("") == VenueRating.RED


def test_private_venue_badge():
    venue = Venue(name="Meera's Kitchen", type="private")
    assert rate_venue(venue) == VenueRating.RED
    assert venue_rating_badge(venue.safety_rating) == "High Caution"
    assert not is_venue_safe(venue.safety_rating)


def test_classification_is_idempotent():
    venue = Venue(name="Library", type="public")
    assert rate_venue(venue) == rate_venue(venue) == venue.safety_rating
    again = Venue.model_validate(venue.model_dump())
    assert again.safety_rating == venue.safety_rating


def test_changing_type_rederives_rating():
    venue = Venue(name="Studio", type="commercial")
    moved = with_venue_type(venue, "public")
    assert moved.safety_rating == VenueRating.GREEN
    assert venue.safety_rating == VenueRating.YELLOW
    assert moved.id == venue.id


def test_descriptions():
    assert venue_rating_badge("green") == "Safe Venue"
    assert venue_rating_badge("purple") == "Unknown"
    assert venue_rating_description("yellow").startswith("Moderate")
    assert venue_type_description("public").startswith("Public venue")
    assert venue_type_description("boat") == "Unknown venue type"
    assert is_venue_safe("yellow")
