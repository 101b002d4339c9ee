# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Locale tables for weekday/month names and default date/time masks.

Lookup order for a locale tag like "de-AT": exact tag, then the language
("de"), then the fallback locale (en-US).
"""

import logging
from dataclasses import dataclass
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en-US"


@dataclass(frozen=True)
class LocaleNames:
    """Names and default masks for one locale."""
    tag: str
    weekdays: Tuple[str, ...]       # Monday first, like datetime.weekday()
    weekdays_short: Tuple[str, ...]
    months: Tuple[str, ...]
    months_short: Tuple[str, ...]
    date_mask: str                  # Used when no custom date mask is set
    time_mask: str                  # Used when no custom time mask is set


_ENGLISH_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_ENGLISH_DAYS_SHORT = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_ENGLISH_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_ENGLISH_MONTHS_SHORT = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                         "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _table() -> Dict[str, LocaleNames]:
    locales = [
        LocaleNames(
            tag="en-US",
            weekdays=_ENGLISH_DAYS,
            weekdays_short=_ENGLISH_DAYS_SHORT,
            months=_ENGLISH_MONTHS,
            months_short=_ENGLISH_MONTHS_SHORT,
            date_mask="m/d/yyyy",
            time_mask="hh:MM TT",
        ),
        LocaleNames(
            tag="en-GB",
            weekdays=_ENGLISH_DAYS,
            weekdays_short=_ENGLISH_DAYS_SHORT,
            months=_ENGLISH_MONTHS,
            months_short=_ENGLISH_MONTHS_SHORT,
            date_mask="dd/mm/yyyy",
            time_mask="HH:MM",
        ),
        LocaleNames(
            tag="de-DE",
            weekdays=("Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag"),
            weekdays_short=("Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"),
            months=("Januar", "Februar", "März", "April", "Mai", "Juni",
                    "Juli", "August", "September", "Oktober", "November", "Dezember"),
            months_short=("Jan", "Feb", "Mär", "Apr", "Mai", "Jun",
                          "Jul", "Aug", "Sep", "Okt", "Nov", "Dez"),
            date_mask="d.m.yyyy",
            time_mask="HH:MM",
        ),
        LocaleNames(
            tag="sv-SE",
            weekdays=("måndag", "tisdag", "onsdag", "torsdag", "fredag", "lördag", "söndag"),
            weekdays_short=("mån", "tis", "ons", "tors", "fre", "lör", "sön"),
            months=("januari", "februari", "mars", "april", "maj", "juni",
                    "juli", "augusti", "september", "oktober", "november", "december"),
            months_short=("jan", "feb", "mars", "apr", "maj", "juni",
                          "juli", "aug", "sep", "okt", "nov", "dec"),
            date_mask="yyyy-mm-dd",
            time_mask="HH:MM",
        ),
        LocaleNames(
            tag="fr-FR",
            weekdays=("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"),
            weekdays_short=("lun.", "mar.", "mer.", "jeu.", "ven.", "sam.", "dim."),
            months=("janvier", "février", "mars", "avril", "mai", "juin",
                    "juillet", "août", "septembre", "octobre", "novembre", "décembre"),
            months_short=("janv.", "févr.", "mars", "avr.", "mai", "juin",
                          "juil.", "août", "sept.", "oct.", "nov.", "déc."),
            date_mask="dd/mm/yyyy",
            time_mask="HH:MM",
        ),
        LocaleNames(
            tag="nl-NL",
            weekdays=("maandag", "dinsdag", "woensdag", "donderdag", "vrijdag", "zaterdag", "zondag"),
            weekdays_short=("ma", "di", "wo", "do", "vr", "za", "zo"),
            months=("januari", "februari", "maart", "april", "mei", "juni",
                    "juli", "augustus", "september", "oktober", "november", "december"),
            months_short=("jan", "feb", "mrt", "apr", "mei", "jun",
                          "jul", "aug", "sep", "okt", "nov", "dec"),
            date_mask="d-m-yyyy",
            time_mask="HH:MM",
        ),
        LocaleNames(
            tag="es-ES",
            weekdays=("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"),
            weekdays_short=("lun", "mar", "mié", "jue", "vie", "sáb", "dom"),
            months=("enero", "febrero", "marzo", "abril", "mayo", "junio",
                    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre"),
            months_short=("ene", "feb", "mar", "abr", "may", "jun",
                          "jul", "ago", "sept", "oct", "nov", "dic"),
            date_mask="d/m/yyyy",
            time_mask="H:MM",
        ),
        LocaleNames(
            tag="it-IT",
            weekdays=("lunedì", "martedì", "mercoledì", "giovedì", "venerdì", "sabato", "domenica"),
            weekdays_short=("lun", "mar", "mer", "gio", "ven", "sab", "dom"),
            months=("gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
                    "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre"),
            months_short=("gen", "feb", "mar", "apr", "mag", "giu",
                          "lug", "ago", "set", "ott", "nov", "dic"),
            date_mask="d/m/yyyy",
            time_mask="HH:MM",
        ),
        LocaleNames(
            tag="da-DK",
            weekdays=("mandag", "tirsdag", "onsdag", "torsdag", "fredag", "lørdag", "søndag"),
            weekdays_short=("man.", "tirs.", "ons.", "tors.", "fre.", "lør.", "søn."),
            months=("januar", "februar", "marts", "april", "maj", "juni",
                    "juli", "august", "september", "oktober", "november", "december"),
            months_short=("jan.", "feb.", "mar.", "apr.", "maj", "jun.",
                          "jul.", "aug.", "sep.", "okt.", "nov.", "dec."),
            date_mask="d.m.yyyy",
            time_mask="HH.MM",
        ),
        LocaleNames(
            tag="nb-NO",
            weekdays=("mandag", "tirsdag", "onsdag", "torsdag", "fredag", "lørdag", "søndag"),
            weekdays_short=("man.", "tir.", "ons.", "tor.", "fre.", "lør.", "søn."),
            months=("januar", "februar", "mars", "april", "mai", "juni",
                    "juli", "august", "september", "oktober", "november", "desember"),
            months_short=("jan.", "feb.", "mar.", "apr.", "mai", "jun.",
                          "jul.", "aug.", "sep.", "okt.", "nov.", "des."),
            date_mask="d.m.yyyy",
            time_mask="HH:MM",
        ),
        LocaleNames(
            tag="fi-FI",
            weekdays=("maanantai", "tiistai", "keskiviikko", "torstai", "perjantai", "lauantai", "sunnuntai"),
            weekdays_short=("ma", "ti", "ke", "to", "pe", "la", "su"),
            months=("tammikuu", "helmikuu", "maaliskuu", "huhtikuu", "toukokuu", "kesäkuu",
                    "heinäkuu", "elokuu", "syyskuu", "lokakuu", "marraskuu", "joulukuu"),
            months_short=("tammi", "helmi", "maalis", "huhti", "touko", "kesä",
                          "heinä", "elo", "syys", "loka", "marras", "joulu"),
            date_mask="d.m.yyyy",
            time_mask="H.MM",
        ),
    ]
    return {names.tag.lower(): names for names in locales}


LOCALES: Dict[str, LocaleNames] = _table()

# Language-only lookups ("de" -> de-DE); first locale per language wins
_LANGUAGES: Dict[str, LocaleNames] = {}
for _names in LOCALES.values():
    _LANGUAGES.setdefault(_names.tag.split("-")[0].lower(), _names)

_warned: set = set()


def get_locale_names(tag: str) -> LocaleNames:
    """
    Look up the names table for a locale tag.

    Args:
        tag: BCP 47 style tag ("sv-SE", "de", "en_GB").

    Returns:
        LocaleNames for the closest supported locale.
    """
    key = (tag or FALLBACK_LOCALE).strip().replace("_", "-").lower()
    names = LOCALES.get(key) or _LANGUAGES.get(key.split("-")[0])
    if names is None:
        if key not in _warned:
            logger.warning(f"Unsupported locale '{tag}', using {FALLBACK_LOCALE}")
            _warned.add(key)
        names = LOCALES[FALLBACK_LOCALE.lower()]
    return names


def supported_locales() -> list:
    """Return the supported locale tags."""
    return [names.tag for names in LOCALES.values()]
