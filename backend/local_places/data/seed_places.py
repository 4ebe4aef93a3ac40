"""
Starter places for a fresh database (a few per category across Chicago, New York and San Francisco).
Loaded by scripts/seed_places.py. Coordinates are approximate.
"""
from typing import TypedDict

from local_places.schemas.place import PlaceCreate


class SeedPlace(TypedDict, total=False):
    name: str
    category: str
    latitude: float
    longitude: float
    rating: float
    price_level: int
    description: str
    amenities: list[str]
    hours: str
    address: str
    phone: str
    website: str


SEED_PLACES: list[SeedPlace] = [
    # Cafes
    {
        "name": "Intelligentsia Coffee Millennium Park",
        "category": "cafe",
        "latitude": 41.8843,
        "longitude": -87.6250,
        "rating": 4.5,
        "price_level": 2,
        "description": "Third-wave roaster with pour-overs and espresso.",
        "amenities": ["wifi", "outdoor_seating"],
        "hours": "7am-7pm",
        "address": "53 E Randolph St, Chicago, IL",
    },
    {
        "name": "Blue Bottle Coffee Hayes Valley",
        "category": "cafe",
        "latitude": 37.7765,
        "longitude": -122.4233,
        "rating": 4.4,
        "price_level": 2,
        "description": "Kiosk in a converted garage; New Orleans iced coffee.",
        "amenities": ["takeout"],
        "hours": "7am-5pm",
        "address": "315 Linden St, San Francisco, CA",
    },
    {
        "name": "Devocion",
        "category": "cafe",
        "latitude": 40.7163,
        "longitude": -73.9646,
        "rating": 4.6,
        "price_level": 2,
        "description": "Colombian coffee under a skylit greenhouse ceiling.",
        "amenities": ["wifi", "power_outlets"],
        "hours": "7am-7pm",
        "address": "69 Grand St, Brooklyn, New York, NY",
    },
    # Restaurants
    {
        "name": "Girl & the Goat",
        "category": "restaurant",
        "latitude": 41.8841,
        "longitude": -87.6479,
        "rating": 4.7,
        "price_level": 3,
        "description": "Shared plates in the West Loop.",
        "amenities": ["reservations", "bar"],
        "hours": "4:30pm-10pm",
        "address": "809 W Randolph St, Chicago, IL",
        "website": "https://www.girlandthegoat.com",
    },
    {
        "name": "Joe's Pizza",
        "category": "restaurant",
        "latitude": 40.7306,
        "longitude": -73.9890,
        "rating": 4.5,
        "price_level": 1,
        "description": "Classic New York slices since 1975.",
        "amenities": ["takeout"],
        "hours": "10am-4am",
        "address": "7 Carmine St, New York, NY",
    },
    {
        "name": "Tartine Bakery",
        "category": "restaurant",
        "latitude": 37.7614,
        "longitude": -122.4241,
        "rating": 4.5,
        "price_level": 2,
        "description": "Bakery and cafe known for morning buns and country loaves.",
        "amenities": ["takeout", "outdoor_seating"],
        "hours": "8am-5pm",
        "address": "600 Guerrero St, San Francisco, CA",
    },
    # Parks
    {
        "name": "Millennium Park",
        "category": "park",
        "latitude": 41.8826,
        "longitude": -87.6226,
        "rating": 4.8,
        "price_level": 1,
        "description": "Downtown park with Cloud Gate and the Pritzker Pavilion.",
        "amenities": ["restrooms", "wheelchair_accessible"],
        "hours": "6am-11pm",
        "address": "201 E Randolph St, Chicago, IL",
    },
    {
        "name": "Central Park",
        "category": "park",
        "latitude": 40.7829,
        "longitude": -73.9654,
        "rating": 4.8,
        "price_level": 1,
        "description": "843 acres of lawns, lakes and trails in Manhattan.",
        "amenities": ["restrooms", "playground", "bike_rental"],
        "hours": "6am-1am",
        "address": "Central Park, New York, NY",
    },
    {
        "name": "Golden Gate Park",
        "category": "park",
        "latitude": 37.7694,
        "longitude": -122.4862,
        "rating": 4.8,
        "price_level": 1,
        "description": "Gardens, museums and meadows stretching to Ocean Beach.",
        "amenities": ["restrooms", "parking", "playground"],
        "hours": "5am-12am",
        "address": "501 Stanyan St, San Francisco, CA",
    },
    # Bookstores
    {
        "name": "City Lights Booksellers",
        "category": "bookstore",
        "latitude": 37.7976,
        "longitude": -122.4066,
        "rating": 4.8,
        "price_level": 2,
        "description": "Independent bookstore and publisher founded in 1953.",
        "amenities": ["reading_area"],
        "hours": "10am-10pm",
        "address": "261 Columbus Ave, San Francisco, CA",
    },
    {
        "name": "The Strand",
        "category": "bookstore",
        "latitude": 40.7332,
        "longitude": -73.9907,
        "rating": 4.7,
        "price_level": 2,
        "description": "18 miles of new, used and rare books.",
        "amenities": ["wifi", "events"],
        "hours": "10am-8pm",
        "address": "828 Broadway, New York, NY",
    },
    {
        "name": "Myopic Books",
        "category": "bookstore",
        "latitude": 41.9088,
        "longitude": -87.6774,
        "rating": 4.6,
        "price_level": 1,
        "description": "Three floors of used books in Wicker Park.",
        "amenities": ["reading_area"],
        "hours": "11am-9pm",
        "address": "1564 N Milwaukee Ave, Chicago, IL",
    },
    # Gyms
    {
        "name": "Equinox Lincoln Park",
        "category": "gym",
        "latitude": 41.9176,
        "longitude": -87.6527,
        "rating": 4.3,
        "price_level": 3,
        "description": "Full-service club with pool and classes.",
        "amenities": ["pool", "sauna", "showers", "classes"],
        "hours": "5am-10pm",
        "address": "1750 N Clark St, Chicago, IL",
    },
    {
        "name": "Brooklyn Boulders",
        "category": "gym",
        "latitude": 40.6826,
        "longitude": -73.9871,
        "rating": 4.4,
        "price_level": 2,
        "description": "Climbing gym with bouldering, yoga and fitness areas.",
        "amenities": ["showers", "classes", "wifi"],
        "hours": "7am-11pm",
        "address": "575 Degraw St, Brooklyn, New York, NY",
    },
    {
        "name": "Mission Cliffs",
        "category": "gym",
        "latitude": 37.7608,
        "longitude": -122.4125,
        "rating": 4.5,
        "price_level": 2,
        "description": "Climbing and fitness in the Mission.",
        "amenities": ["showers", "classes"],
        "hours": "6am-11pm",
        "address": "2295 Harrison St, San Francisco, CA",
    },
    # Grocery
    {
        "name": "Eataly Chicago",
        "category": "grocery",
        "latitude": 41.8919,
        "longitude": -87.6257,
        "rating": 4.4,
        "price_level": 3,
        "description": "Italian marketplace with counters and restaurants.",
        "amenities": ["wifi", "restrooms"],
        "hours": "9am-10pm",
        "address": "43 E Ohio St, Chicago, IL",
    },
    {
        "name": "Union Square Greenmarket",
        "category": "grocery",
        "latitude": 40.7359,
        "longitude": -73.9911,
        "rating": 4.7,
        "price_level": 2,
        "description": "Farmers market, four days a week.",
        "amenities": ["outdoor_seating"],
        "hours": "8am-6pm Mon/Wed/Fri/Sat",
        "address": "E 17th St & Union Square W, New York, NY",
    },
    {
        "name": "Rainbow Grocery",
        "category": "grocery",
        "latitude": 37.7691,
        "longitude": -122.4152,
        "rating": 4.6,
        "price_level": 2,
        "description": "Worker-owned cooperative with a huge bulk section.",
        "amenities": ["bike_parking"],
        "hours": "9am-9pm",
        "address": "1745 Folsom St, San Francisco, CA",
    },
]


def get_seed_places() -> list[PlaceCreate]:
    """Seed entries validated as PlaceCreate."""
    return [PlaceCreate(**p) for p in SEED_PLACES]
