"""Unit tests for request-boundary validation."""

import pytest

from core.errors import ErrorCode, ValidationError
from core.models import BLOG, TRIP, TRIP_CATEGORIES, BlogUpdate, TripCreate, TripUpdate
from core.validation import (
    TRIP_REQUIRED_FIELDS,
    validate_blog_create,
    validate_blog_update,
    validate_create,
    validate_trip_create,
    validate_trip_update,
    validate_update,
)


def test_valid_trip_create(trip_form):
    trip = validate_trip_create(trip_form)
    assert isinstance(trip, TripCreate)
    assert trip.price == 8999
    assert trip.itinerary[0].day == "1"


def test_missing_required_field_lists_required(trip_form):
    del trip_form["to"]
    with pytest.raises(ValidationError) as exc_info:
        validate_trip_create(trip_form)
    assert exc_info.value.message == "Missing required fields"
    assert exc_info.value.details == {"required": TRIP_REQUIRED_FIELDS}
    assert exc_info.value.status_code == 400


def test_blank_required_field_counts_as_missing(trip_form):
    trip_form["heading"] = "   "
    with pytest.raises(ValidationError, match="Missing required fields"):
        validate_trip_create(trip_form)


def test_invalid_category_reports_offenders(trip_form):
    trip_form["category"] = ["SUNRISE TREKS", "CRUISES"]
    with pytest.raises(ValidationError) as exc_info:
        validate_trip_create(trip_form)
    assert exc_info.value.message == "Invalid category values"
    assert exc_info.value.details == {"invalidCategories": ["CRUISES"], "validCategories": TRIP_CATEGORIES}


def test_single_category_string_is_accepted(trip_form):
    trip_form["category"] = "LONG WEEKEND"
    assert [c.value for c in validate_trip_create(trip_form).category] == ["LONG WEEKEND"]


@pytest.mark.parametrize("price", [0, -5, "abc", "inf", True])
def test_price_must_be_positive_number(trip_form, price):
    trip_form["price"] = price
    with pytest.raises(ValidationError, match="Price must be a positive number"):
        validate_trip_create(trip_form)


def test_price_string_is_parsed(trip_form):
    trip_form["price"] = "4500.50"
    assert validate_trip_create(trip_form).price == 4500.5


def test_empty_highlights_rejected(trip_form):
    trip_form["highlights"] = []
    with pytest.raises(ValidationError, match="Highlights must be a non-empty array"):
        validate_trip_create(trip_form)


def test_itinerary_required_on_create(trip_form):
    del trip_form["itinerary"]
    with pytest.raises(ValidationError, match="Itinerary is required and must be a non-empty array"):
        validate_trip_create(trip_form)


def test_itinerary_item_shape(trip_form):
    trip_form["itinerary"] = [{"day": "1", "activities": []}]
    with pytest.raises(ValidationError, match="Each itinerary item must have 'day' and 'activities'"):
        validate_trip_create(trip_form)


def test_trip_update_drops_blank_values():
    update = validate_trip_update({"heading": "", "to": "Manali", "price": None})
    assert isinstance(update, TripUpdate)
    assert update.model_dump(exclude_unset=True) == {"to": "Manali"}


def test_trip_update_itinerary_message():
    with pytest.raises(ValidationError, match="^Itinerary must be a non-empty array$"):
        validate_trip_update({"itinerary": []})


def test_trip_update_validates_categories():
    with pytest.raises(ValidationError, match="Invalid category values"):
        validate_trip_update({"category": ["NOPE"]})


def test_trip_update_without_fields_is_empty():
    assert validate_trip_update({}).model_dump(exclude_unset=True) == {}


def test_valid_blog_create(blog_form):
    blog = validate_blog_create(blog_form)
    assert blog.how_to_reach[0].key == "Air"
    assert blog.located_in == ["Karnataka", "India"]


def test_blog_pair_items_need_key_and_value(blog_form):
    blog_form["faq"] = [{"key": "Best time?"}]
    with pytest.raises(ValidationError, match="Each FAQ item must have 'key' and 'value'"):
        validate_blog_create(blog_form)


def test_blog_how_to_reach_items_need_key_and_value(blog_form):
    blog_form["howToReach"] = [{"value": "Bus"}]
    with pytest.raises(ValidationError, match="Each howToReach item must have 'key' and 'value'"):
        validate_blog_create(blog_form)


def test_blog_update_partial():
    update = validate_blog_update({"locationName": "Hampi", "authorName": " "})
    assert isinstance(update, BlogUpdate)
    assert update.model_dump(exclude_unset=True) == {"location_name": "Hampi"}


def test_pydantic_failures_become_validation_errors(blog_form):
    blog_form["idealFor"] = [{"not": "a string"}]
    with pytest.raises(ValidationError) as exc_info:
        validate_blog_create(blog_form)
    assert exc_info.value.message == "Validation error"
    assert exc_info.value.code is ErrorCode.VALIDATION_ERROR
    assert exc_info.value.details["errors"]


def test_dispatch_by_kind(trip_form, blog_form):
    assert isinstance(validate_create(TRIP, trip_form), TripCreate)
    assert validate_create(BLOG, blog_form).heading == "Chasing Monsoon in Coorg"
    assert isinstance(validate_update(BLOG, {}), BlogUpdate)
