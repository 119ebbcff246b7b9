import argparse

import pytest

from tradematch.core.config import ConfigError, Settings
from tradematch.jobs import search_contractors as job


def make_settings(**overrides):
    values = dict(google_api_key="abc", openai_api_key="")
    values.update(overrides)
    return Settings(**values)


def place(place_id, name, rating, reviews, **extra):
    return {"place_id": place_id, "name": name, "rating": rating, "user_ratings_total": reviews, **extra}


@pytest.fixture
def places():
    return [
        place("1", "Acme Painters", 4.8, 50, types=["painter"], opening_hours={"open_now": True}),
        place("2", "Bob's Decor", 3.6, 4, types=["painter"]),
        place("3", "Cheap Paint Co", 2.0, 100, types=["painter"]),
        {"place_id": "4"},
    ]


def test_search_requires_api_key(monkeypatch):
    monkeypatch.setattr(job, "get_settings", lambda: make_settings(google_api_key=""))

    with pytest.raises(ConfigError):
        job.search_contractors(job_type="painting-room", location="Bath")


def test_search_requires_job_type_and_location(monkeypatch):
    monkeypatch.setattr(job, "get_settings", lambda: make_settings())

    with pytest.raises(ValueError):
        job.search_contractors(job_type=" ", location="Bath")


def test_search_uses_text_search_and_ranks(monkeypatch, places):
    monkeypatch.setattr(job, "get_settings", lambda: make_settings())
    calls = {}

    def fake_text_search(query, api_key, types=None, pagetoken=None):
        calls["query"] = query
        calls["types"] = types
        return {"status": "OK", "results": places}

    def fail_nearby(**kwargs):
        raise AssertionError("nearby search should not be used without coordinates")

    monkeypatch.setattr(job.google_places, "text_search", fake_text_search)
    monkeypatch.setattr(job.google_places, "nearby_search", fail_nearby)

    result = job.search_contractors(job_type="painting-room", location="Bath")

    assert calls["query"] == "painter decorator in Bath"
    assert calls["types"] == ["painter", "painting_contractor"]
    assert result["searchQuery"] == "painter decorator in Bath"
    assert result["totalFound"] == 4
    assert result["filters"] == {"minimumRating": 3.5, "minimumReviews": 3, "relaxed": True}
    assert [c["name"] for c in result["contractors"]] == ["Acme Painters", "Bob's Decor"]
    assert all(c["qualityVerified"] is False for c in result["contractors"])
    assert result["locationData"] is None


def test_search_uses_nearby_search_with_coordinates(monkeypatch, places):
    monkeypatch.setattr(job, "get_settings", lambda: make_settings(search_radius_m=8000, min_acceptable=1))
    calls = {}

    def fake_nearby(latitude, longitude, radius_m, keyword, api_key, types=None):
        calls.update(latitude=latitude, longitude=longitude, radius_m=radius_m, keyword=keyword)
        return {"status": "OK", "results": places}

    monkeypatch.setattr(job.google_places, "nearby_search", fake_nearby)

    result = job.search_contractors(
        job_type="painting-room",
        location="BA1 1AA",
        latitude=51.38,
        longitude=-2.36,
        postcode_record={"region": "South West", "admin_district": "Bath and North East Somerset"},
    )

    assert calls == {"latitude": 51.38, "longitude": -2.36, "radius_m": 8000, "keyword": "painter decorator"}
    assert result["filters"]["relaxed"] is False
    assert [c["name"] for c in result["contractors"]] == ["Acme Painters"]
    assert result["contractors"][0]["qualityVerified"] is True
    assert result["locationData"] == {
        "costMultiplier": 1.25,
        "costReason": "High-value area",
        "region": "South West",
    }


def test_search_merges_details_and_tolerates_failures(monkeypatch, places):
    monkeypatch.setattr(job, "get_settings", lambda: make_settings(fetch_details=True, min_acceptable=1))
    monkeypatch.setattr(job.google_places, "text_search", lambda **kwargs: {"results": places[:2]})

    def fake_details(place_id, api_key):
        if place_id == "2":
            raise RuntimeError("boom")
        return {"website": "https://acme.example", "formatted_phone_number": "0123"}

    monkeypatch.setattr(job.google_places, "place_details", fake_details)

    result = job.search_contractors(job_type="painting-room", location="Bath")

    acme = result["contractors"][0]
    assert acme["website"] == "https://acme.example"
    assert acme["phoneNumber"] == "0123"
    assert acme["scoreBreakdown"]["professional"] == 10.0


def test_search_caps_results_at_top_n(monkeypatch):
    many = [place(str(i), f"Roofer {i}", 4.5, 30) for i in range(9)]
    monkeypatch.setattr(job, "get_settings", lambda: make_settings(top_n=4))
    monkeypatch.setattr(job.google_places, "text_search", lambda **kwargs: {"results": many})

    result = job.search_contractors(job_type="new-roof", location="Leeds")

    assert len(result["contractors"]) == 4
    assert result["totalFound"] == 9


def test_build_parser():
    parser = job.build_parser()
    args = parser.parse_args(["--job-type", "rewire", "--location", "York", "--lat", "53.9", "--lng", "-1.08"])
    assert isinstance(parser, argparse.ArgumentParser)
    assert args.job_type == "rewire"
    assert args.latitude == 53.9
    assert args.longitude == -1.08
