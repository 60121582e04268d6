"""
Diyanet backend: scrapes the official namazvakitleri.diyanet.gov.tr city page.
The page has no stable contract; extraction is best-effort and all-or-nothing.
"""
from datetime import datetime
from typing import Dict, List, Optional, Union

from bs4 import BeautifulSoup

from .base import (
    MalformedResponseError,
    PrayerTime,
    PrayerTimesBackend,
    build_prayer_time,
    normalize_time,
)

DIYANET_URL = "https://namazvakitleri.diyanet.gov.tr/tr-TR/{city_code}"

_ASCII_FOLD = str.maketrans("İıĞğÜüŞşÖöÇç", "IiGgUuSsOoCc")

# Folded label text -> PrayerTime field
_LABELS = {
    "imsak": "imsak",
    "gunes": "sunrise",
    "ogle": "noon",
    "ikindi": "afternoon",
    "aksam": "sunset",
    "yatsi": "night",
}


def _fold(text: str) -> str:
    """'Yatsı' -> 'yatsi', 'İMSAK' -> 'imsak'."""
    return (text or "").strip().translate(_ASCII_FOLD).lower()


def extract_prayer_times(html: Union[str, bytes], from_encoding: Optional[str] = None) -> Dict[str, Optional[str]]:
    """Pull the six labeled times and the date heading out of a Diyanet page.

    Raw bytes are decoded by BeautifulSoup (declared <meta> charset, then detection)
    unless from_encoding is given.

    Returns a dict with the PrayerTime field names plus 'date'; values that
    could not be found are absent.
    """
    soup = BeautifulSoup(html, "html.parser", from_encoding=from_encoding)
    found: Dict[str, Optional[str]] = {}

    # <td>Akşam</td><td>19:45</td>
    for cell in soup.find_all(["td", "th"]):
        field = _LABELS.get(_fold(cell.get_text(strip=True)))
        if not field or field in found:
            continue
        value_cell = cell.find_next_sibling(["td", "th"])
        value = normalize_time(value_cell.get_text(strip=True)) if value_cell else None
        if value:
            found[field] = value

    # <div data-vakit-name="aksam"><div class="tpt-time">19:45</div></div>
    for cell in soup.select("[data-vakit-name]"):
        field = _LABELS.get(_fold(cell.get("data-vakit-name", "")))
        if not field or field in found:
            continue
        time_el = cell.select_one(".tpt-time") or cell
        value = normalize_time(time_el.get_text(strip=True))
        if value:
            found[field] = value

    heading = soup.find("h3")
    if heading and heading.get_text(strip=True):
        found["date"] = heading.get_text(strip=True)
    return found


class DiyanetBackend(PrayerTimesBackend):
    """Primary source: Diyanet İşleri Başkanlığı HTML page."""

    id = "diyanet"
    name = "Diyanet İşleri"
    description = "Türkiye Diyanet İşleri Başkanlığı resmi verileri"

    def fetch(self, city_code: str) -> List[PrayerTime]:
        url = self.config.get("diyanet_url", DIYANET_URL).format(city_code=city_code)
        self.logger.info(f"Trying Diyanet: {url}")
        response = self._get(url, accept="application/json, text/html")

        # requests assumes ISO-8859-1 for text/html without a charset; only trust a declared one
        declared = "charset" in response.headers.get("Content-Type", "").lower()
        found = extract_prayer_times(response.content, from_encoding=response.encoding if declared else None)
        date_text = found.pop("date", None) or datetime.now().strftime("%d.%m.%Y")
        try:
            prayer_time = build_prayer_time(date_text, found)
        except MalformedResponseError as e:
            raise MalformedResponseError(f"Could not extract prayer times from Diyanet page: {e.reason}") from e

        self.logger.info(f"Extracted prayer times from Diyanet HTML: {prayer_time}")
        return [prayer_time]
