"""
Static registry of Turkish provinces keyed by the Diyanet city code.
Name lookups are ASCII so they can be passed straight to name-based APIs.
"""
from typing import Dict, List, Optional

DEFAULT_CITY_NAME = "Istanbul"

CITY_NAMES: Dict[str, str] = {
    "10550": "Adana",
    "10552": "Adiyaman",
    "10553": "Afyonkarahisar",
    "10555": "Agri",
    "10556": "Aksaray",
    "10558": "Amasya",
    "10604": "Ankara",
    "10642": "Antalya",
    "10647": "Ardahan",
    "10648": "Artvin",
    "10649": "Aydin",
    "10650": "Balikesir",
    "10651": "Bartin",
    "10652": "Batman",
    "10653": "Bayburt",
    "10654": "Bilecik",
    "10655": "Bingol",
    "10656": "Bitlis",
    "10657": "Bolu",
    "10659": "Burdur",
    "10923": "Bursa",
    "10924": "Canakkale",
    "10925": "Cankiri",
    "10926": "Corum",
    "10927": "Denizli",
    "10928": "Diyarbakir",
    "10929": "Duzce",
    "10930": "Edirne",
    "10931": "Elazig",
    "10932": "Erzincan",
    "10933": "Erzurum",
    "10934": "Eskisehir",
    "10935": "Gaziantep",
    "10936": "Giresun",
    "10937": "Gumushane",
    "10938": "Hakkari",
    "10939": "Hatay",
    "10940": "Igdir",
    "10941": "Isparta",
    "11001": "Istanbul",
    "11231": "Izmir",
    "11232": "Kahramanmaras",
    "11233": "Karabuk",
    "11234": "Karaman",
    "11235": "Kars",
    "11236": "Kastamonu",
    "11237": "Kayseri",
    "11238": "Kilis",
    "11239": "Kirikkale",
    "11240": "Kirklareli",
    "11241": "Kirsehir",
    "11242": "Kocaeli",
    "11243": "Konya",
    "11244": "Kutahya",
    "11245": "Malatya",
    "11246": "Manisa",
    "11247": "Mardin",
    "11248": "Mersin",
    "11249": "Mugla",
    "11250": "Mus",
    "11251": "Nevsehir",
    "11252": "Nigde",
    "11253": "Ordu",
    "11254": "Osmaniye",
    "11255": "Rize",
    "11256": "Sakarya",
    "11257": "Samsun",
    "11258": "Sanliurfa",
    "11259": "Siirt",
    "11260": "Sinop",
    "11261": "Sivas",
    "11262": "Sirnak",
    "11263": "Tekirdag",
    "11264": "Tokat",
    "11265": "Trabzon",
    "11266": "Tunceli",
    "11267": "Usak",
    "11268": "Van",
    "11269": "Yalova",
    "11270": "Yozgat",
    "11271": "Zonguldak",
}

_CODES_BY_NAME: Dict[str, str] = {name.lower(): code for code, name in CITY_NAMES.items()}


def get_city_name(city_code: str) -> str:
    """Return the province name for a city code, or DEFAULT_CITY_NAME when unknown."""
    return CITY_NAMES.get(str(city_code).strip(), DEFAULT_CITY_NAME)


def get_city_code(city_name: str) -> Optional[str]:
    """Reverse lookup, case-insensitive. Returns None for unknown names."""
    if not city_name:
        return None
    return _CODES_BY_NAME.get(city_name.strip().lower())


def list_cities() -> List[Dict[str, str]]:
    """All provinces as [{"code", "name"}], sorted by name."""
    return [
        {"code": code, "name": name}
        for code, name in sorted(CITY_NAMES.items(), key=lambda item: item[1])
    ]
