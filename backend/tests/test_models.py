"""
Prospection - Vue fusionnée et découpage du payload
Run: pytest backend/tests/test_models.py -v
"""

from datetime import datetime, timezone

from models.prospection import build_user_profile, split_profile


class TestBuildUserProfile:

    def test_identity_only(self):
        profile = build_user_profile({"phone": "1", "nom": "Doe", "prenom": "John"})
        assert profile == {"phone": "1", "nom": "Doe", "prenom": "John", "locationShared": False}

    def test_merge_drops_absent_fields(self):
        profile = build_user_profile(
            {"phone": "1", "nom": "Doe"},
            {"phone": "1", "zone": "A", "resultatProspection": None, "locationShared": False},
        )
        assert profile["zone"] == "A"
        assert "resultatProspection" not in profile
        assert "location" not in profile

    def test_location_nested(self):
        profile = build_user_profile(
            {"phone": "1"},
            {"phone": "1", "locationShared": True, "latitude": 1.0, "longitude": 2.0,
             "locationTimestamp": datetime(2026, 3, 1, 10, 0)},
        )
        assert profile["location"] == {
            "latitude": 1.0,
            "longitude": 2.0,
            "timestamp": "2026-03-01T10:00:00+00:00",
        }
        assert "latitude" not in profile

    def test_prospection_timestamp_exposed(self):
        profile = build_user_profile({"phone": "1"}, {"phone": "1", "updated_at": "2026-03-01T10:00:00+00:00"})
        assert profile["lastProspectionAt"] == "2026-03-01T10:00:00+00:00"


class TestSplitProfile:

    def test_split(self):
        identity, visit = split_profile({"nom": "Doe", "prenom": "John", "zone": "A", "immeuble": "1", "other": "x"})
        assert identity == {"nom": "Doe", "prenom": "John"}
        assert visit == {"zone": "A", "immeuble": "1"}

    def test_none_ignored(self):
        identity, visit = split_profile({"nom": None, "zone": None, "immeuble": ""})
        assert identity == {}
        assert visit == {"immeuble": ""}

    def test_nested_location(self):
        ts = datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)
        _, visit = split_profile({"location": {"latitude": 1.0, "longitude": 2.0, "accuracy": 15.0, "timestamp": ts}})
        assert visit == {
            "locationShared": True,
            "latitude": 1.0,
            "longitude": 2.0,
            "locationAccuracy": 15.0,
            "locationTimestamp": "2026-03-01T10:00:00+00:00",
        }

    def test_nested_location_without_accuracy(self):
        _, visit = split_profile({"location": {"latitude": 1.0, "longitude": 2.0, "timestamp": "2026-03-01T10:00:00+00:00"}})
        assert "locationAccuracy" in visit
        assert visit["locationAccuracy"] is None

    def test_flat_location(self):
        _, visit = split_profile({"latitude": 1.0, "longitude": 2.0})
        assert visit == {"locationShared": True, "latitude": 1.0, "longitude": 2.0}

    def test_flag_without_location(self):
        _, visit = split_profile({"locationShared": False})
        assert visit == {"locationShared": False}
