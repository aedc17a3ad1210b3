"""Tests for vessel models and the search/create form."""

from datetime import datetime, timezone

import pytest

from vmt.models.form import VesselForm
from vmt.models.vessel import LastSeenPosition, Vessel
from vmt.utils import datetime_to_epoch_ms, epoch_ms_to_datetime, identity_from_location

# 2024-01-01T12:34:56.789Z
SEEN_AT_MS = 1704112496789


class TestLastSeenPosition:
    """Tests for the time/date views of a sighting."""

    @pytest.mark.unit
    def test_load_derives_date_from_time(self):
        position = LastSeenPosition(location=(51.9, 4.1), time=SEEN_AT_MS)

        derived = position.with_derived_date()

        assert derived.date == datetime(2024, 1, 1, 12, 34, 56, 789000, tzinfo=timezone.utc)
        assert derived.time == SEEN_AT_MS

    @pytest.mark.unit
    def test_round_trip_keeps_time_and_drops_date(self):
        position = LastSeenPosition(location=(51.9, 4.1), time=SEEN_AT_MS)

        saved = position.with_derived_date().with_canonical_time()

        assert saved.time == SEEN_AT_MS
        assert saved.date is None

    @pytest.mark.unit
    def test_saving_takes_time_from_edited_date(self):
        position = LastSeenPosition(time=SEEN_AT_MS).with_derived_date()
        edited = position.model_copy(
            update={"date": datetime(2024, 2, 1, tzinfo=timezone.utc)}
        )

        assert edited.with_canonical_time().time == 1706745600000

    @pytest.mark.unit
    def test_at_truncates_to_minute(self):
        now = datetime(2024, 1, 1, 12, 34, 56, 789000, tzinfo=timezone.utc)

        position = LastSeenPosition.at(now)

        assert position.location == (0.0, 0.0)
        assert position.date == datetime(2024, 1, 1, 12, 34, tzinfo=timezone.utc)
        assert position.time == 1704112440000

    @pytest.mark.unit
    def test_date_never_serialized(self):
        position = LastSeenPosition(time=SEEN_AT_MS).with_derived_date()

        assert "date" not in position.model_dump()


class TestVessel:
    """Tests for the Vessel model."""

    @pytest.mark.unit
    def test_parses_wire_format(self):
        vessel = Vessel.model_validate(
            {
                "uuid": "abc123",
                "name": "Orion",
                "width": 10,
                "length": 50,
                "draft": 10,
                "lastSeenPosition": {"location": [1.5, 2.5], "time": SEEN_AT_MS},
                "_id": "ignored",
            }
        )

        assert vessel.last_seen_position.location == (1.5, 2.5)
        assert vessel.last_seen_position.time == SEEN_AT_MS

    @pytest.mark.unit
    def test_to_wire_uses_aliases_and_skips_derived_date(self):
        vessel = Vessel(
            uuid="abc123",
            name="Orion",
            width=10,
            last_seen_position=LastSeenPosition(location=(1, 2), time=SEEN_AT_MS),
        ).for_editing()

        wire = vessel.to_wire()

        assert wire == {
            "uuid": "abc123",
            "name": "Orion",
            "width": 10.0,
            "lastSeenPosition": {"location": [1.0, 2.0], "time": SEEN_AT_MS},
        }

    @pytest.mark.unit
    def test_editing_and_saving_round_trip(self):
        stored = Vessel(
            uuid="abc123",
            name="Orion",
            last_seen_position=LastSeenPosition(time=SEEN_AT_MS),
        )

        editing = stored.for_editing()
        saved = editing.for_saving()

        assert editing.last_seen_position.date == epoch_ms_to_datetime(SEEN_AT_MS)
        assert saved.last_seen_position.time == SEEN_AT_MS
        assert saved.last_seen_position.date is None
        assert stored.last_seen_position.date is None

    @pytest.mark.unit
    def test_vessel_without_position(self):
        vessel = Vessel(name="Orion")

        assert vessel.for_editing() == vessel
        assert vessel.for_saving() == vessel


class TestVesselForm:
    """Tests for VesselForm dirty tracking and validation."""

    @pytest.mark.unit
    def test_defaults_are_not_populated(self):
        form = VesselForm(defaults={"width": 10, "length": 50, "draft": 10})

        assert form.get("width") == 10
        assert form.populated_fields == frozenset()
        assert not form.is_dirty

    @pytest.mark.unit
    def test_set_marks_touched(self):
        form = VesselForm(defaults={"width": 10})
        form.set("width", 12)

        assert form.is_populated("width")
        assert form.is_dirty

    @pytest.mark.unit
    def test_zero_is_not_populated(self):
        form = VesselForm()
        form.set("draft", 0)

        assert not form.is_populated("draft")

    @pytest.mark.unit
    def test_numeric_strings_are_coerced(self):
        form = VesselForm()
        form.update(width="12.5", length="")

        assert form.get("width") == 12.5
        assert form.get("length") is None

    @pytest.mark.unit
    def test_mark_pristine_keeps_entered_values(self):
        form = VesselForm()
        form.set("name", "Orion")
        form.mark_pristine()

        assert form.get("name") == "Orion"
        assert not form.is_dirty
        assert form.is_populated("name")

    @pytest.mark.unit
    def test_unknown_field(self):
        with pytest.raises(KeyError):
            VesselForm().set("tonnage", 5)

    @pytest.mark.unit
    def test_validation(self):
        form = VesselForm(defaults={"width": 10, "length": 50, "draft": 10})
        assert form.validation_errors() == ["name is required"]

        form.update(name="Orion", draft=-1)
        assert form.validation_errors() == ["draft must be a positive number"]

        form.set("draft", 10)
        assert form.is_valid

    @pytest.mark.unit
    def test_to_vessel_has_no_identity(self):
        form = VesselForm(defaults={"width": 10, "length": 50, "draft": 10})
        form.set("name", "Orion")

        vessel = form.to_vessel()

        assert vessel == Vessel(name="Orion", width=10, length=50, draft=10)
        assert vessel.uuid is None


class TestUtils:
    """Tests for conversion helpers."""

    @pytest.mark.unit
    def test_naive_datetime_is_utc(self):
        assert datetime_to_epoch_ms(datetime(1970, 1, 1, 0, 0, 1)) == 1000

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "location,expected",
        [
            ("/vessels/abc123", "abc123"),
            ("http://registry.test/vessels/abc123", "abc123"),
            ("abc123", "abc123"),
            (None, None),
        ],
    )
    def test_identity_from_location(self, location, expected):
        assert identity_from_location(location) == expected
