from __future__ import annotations

from pashuvision.domain.value_objects.species import Species

# Recognised indigenous breeds plus the common exotic / crossbred types seen in the field.
CATTLE_BREEDS: list[str] = [
    "Gir",
    "Sahiwal",
    "Red Sindhi",
    "Tharparkar",
    "Rathi",
    "Kankrej",
    "Ongole",
    "Hariana",
    "Hallikar",
    "Amritmahal",
    "Khillari",
    "Kangayam",
    "Deoni",
    "Krishna Valley",
    "Malvi",
    "Nagori",
    "Nimari",
    "Bargur",
    "Vechur",
    "Punganur",
    "Umblachery",
    "Pulikulam",
    "Dangi",
    "Gaolao",
    "Kenkatha",
    "Kherigarh",
    "Ponwar",
    "Siri",
    "Red Kandhari",
    "Sahiwal Cross",
    "Holstein Friesian",
    "Jersey",
]

BUFFALO_BREEDS: list[str] = [
    "Murrah",
    "Nili-Ravi",
    "Jaffarabadi",
    "Mehsana",
    "Surti",
    "Bhadawari",
    "Nagpuri",
    "Pandharpuri",
    "Toda",
    "Banni",
    "Chilika",
    "Kalahandi",
    "Marathwadi",
    "Godavari",
]


def breeds_for(species: str) -> list[str]:
    if species == Species.BUFFALO.value:
        return BUFFALO_BREEDS
    return CATTLE_BREEDS
