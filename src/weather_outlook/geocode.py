# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
geocode.py — Place name ⇄ coordinates lookups.

Forward lookups use the Open-Meteo Geocoding API, reverse lookups use
OpenStreetMap Nominatim. Both are free and need no API key.

API docs: https://open-meteo.com/en/docs/geocoding-api
          https://nominatim.org/release-docs/latest/api/Reverse/
"""

import requests
from weather_outlook.utils import with_retry

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"

# Nominatim asks every client to identify itself
USER_AGENT = "weather-outlook/0.1"


class LocationNotFoundError(LookupError):
    """The geocoder returned no match for a place name."""


def geocode(place: str) -> dict:
    """Look up coordinates for a place name using Open-Meteo Geocoding.

    Args:
        place: Human-readable place name, e.g. 'Tokyo' or 'London, UK'.

    Returns:
        Dict with keys: latitude (float), longitude (float), name (str).
        The name is a canonical 'City, Region, Country' string.

    Raises:
        LocationNotFoundError: If no results are found for the place name.
        RuntimeError: If all API retry attempts fail.
    """
    params = {
        "name": place,
        "count": 1,
        "language": "en",
        "format": "json",
    }

    def _call():
        r = requests.get(GEOCODING_URL, params=params, timeout=10)
        r.raise_for_status()
        return r.json()

    data = with_retry(_call, label=f"Geocoding API for '{place}'")

    results = data.get("results")
    if not results:
        raise LocationNotFoundError(f'Location "{place}" not found. Try a more specific name.')

    result = results[0]
    # "City, Region, Country", skipping parts the API leaves empty
    name_parts = [result.get("name", place)]
    if result.get("admin1"):
        name_parts.append(result["admin1"])
    if result.get("country"):
        name_parts.append(result["country"])

    return {
        "latitude": result["latitude"],
        "longitude": result["longitude"],
        "name": ", ".join(name_parts),
    }


def reverse_geocode(latitude: float, longitude: float) -> str:
    """Return a short place name for a coordinate.

    Picks the first of city, town, village or state from Nominatim's address.
    Any failure, or an address without those parts, falls back to the
    plain "lat, lon" string so callers always get a usable label.
    """
    fallback = f"{latitude}, {longitude}"
    params = {"format": "json", "lat": latitude, "lon": longitude}

    try:
        r = requests.get(
            REVERSE_URL,
            params=params,
            headers={"User-Agent": USER_AGENT},
            timeout=10,
        )
        r.raise_for_status()
        address = r.json().get("address") or {}
    except (requests.RequestException, ValueError) as e:
        print(f"[geocode] Reverse lookup failed for ({latitude}, {longitude}): {e}")
        return fallback

    for key in ("city", "town", "village", "state"):
        if address.get(key):
            return address[key]
    return fallback
