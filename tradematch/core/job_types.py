"""Mapping of product job types to places search phrases and business types."""

from typing import List

SEARCH_TERMS = {
    "extension": ["home extension builder", "house extension contractor", "building extension"],
    "loft-conversion": ["loft conversion specialist", "attic conversion", "loft builder"],
    "new-roof": ["roofing contractor", "roofer", "roof specialist"],
    "driveway": ["driveway installer", "driveway contractor", "paving specialist"],
    "painting-room": ["painter decorator", "interior painter", "painting contractor"],
    "wallpapering": ["wallpaper installer", "wallpapering specialist", "decorator"],
    "floor-sanding": ["floor sanding service", "floor refinishing", "wood floor specialist"],
    "bathroom-install": ["bathroom fitter", "bathroom installer", "bathroom renovation"],
    "boiler-replacement": ["boiler installer", "heating engineer", "boiler specialist"],
    "radiator-install": ["heating engineer", "central heating installer", "plumber"],
    "rewire": ["electrician rewiring", "electrical rewiring", "house rewire electrician"],
    "consumer-unit": ["electrician", "electrical contractor", "fuse box electrician"],
    "ev-charger": ["EV charger installer", "electric car charger", "EV charging point installer"],
    "garden-landscaping": ["garden landscaper", "landscaping contractor", "garden designer"],
    "window-cleaning": ["window cleaner", "window cleaning service", "professional window cleaner"],
}

PLACE_TYPES = {
    # Construction
    "extension": ["general_contractor", "home_builder", "construction_company"],
    "loft-conversion": ["general_contractor", "roofing_contractor", "home_builder"],
    "new-roof": ["roofing_contractor", "general_contractor"],
    "driveway": ["general_contractor", "paving_contractor"],
    # Decoration
    "painting-room": ["painter", "painting_contractor"],
    "wallpapering": ["painter", "interior_decorator"],
    "floor-sanding": ["flooring_contractor", "flooring_store"],
    # Plumbing
    "bathroom-install": ["plumber", "bathroom_remodeler"],
    "boiler-replacement": ["plumber", "heating_contractor"],
    "radiator-install": ["plumber", "heating_contractor"],
    # Electrical
    "rewire": ["electrician"],
    "consumer-unit": ["electrician"],
    "ev-charger": ["electrician", "car_repair"],
    # Outdoor
    "garden-landscaping": ["landscaping", "landscape_designer", "lawn_care"],
    "window-cleaning": ["window_cleaning_service", "cleaning_service"],
}

DEFAULT_PLACE_TYPES = ["general_contractor"]


def search_keyword(job_type: str) -> str:
    """Primary search phrase for a job type; unknown job types are searched as-is."""
    terms = SEARCH_TERMS.get(job_type)
    return terms[0] if terms else job_type


def place_types(job_type: str) -> List[str]:
    return list(PLACE_TYPES.get(job_type, DEFAULT_PLACE_TYPES))
