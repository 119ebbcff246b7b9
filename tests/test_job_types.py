from tradematch.core import job_types


def test_search_keyword_uses_first_phrase():
    assert job_types.search_keyword("painting-room") == "painter decorator"
    assert job_types.search_keyword("new-roof") == "roofing contractor"


def test_unknown_job_type_is_searched_as_is():
    assert job_types.search_keyword("pond digging") == "pond digging"
    assert job_types.place_types("pond digging") == ["general_contractor"]


def test_place_types_returns_a_copy():
    types = job_types.place_types("rewire")
    types.append("mutated")
    assert job_types.place_types("rewire") == ["electrician"]
