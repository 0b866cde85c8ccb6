"""Recursos inmutables: gentilicios, sustituciones propias, persona→lugar y lista negra."""
from __future__ import annotations
import csv
import io
from importlib.resources import files
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .lookups import LookupTable, MembershipSet

DEMONYMS_FILE = "demonyms.csv"
CUSTOM_SUBSTITUTION_FILE = "custom-substitutions.csv"
LOCATION_BLACKLIST_FILE = "location-blacklist.txt"
PERSON_TO_PLACE_FILE = "person-to-place-replacements.csv"


def read_resource_text(name: str, path: Optional[str | Path] = None) -> str:
    """Texto de `path` si viene; si no, el recurso embebido en `extractor/resources`."""
    if path is not None:
        return Path(path).read_text(encoding="utf-8")
    return files("extractor.resources").joinpath(name).read_text(encoding="utf-8")


def _data_lines(text: str) -> Iterator[str]:
    # líneas vacías y comentarios (#) se ignoran
    for line in text.splitlines():
        if line.strip() and not line.lstrip().startswith("#"):
            yield line


def parse_pairs(text: str) -> List[Tuple[str, str]]:
    """CSV `clave,reemplazo` → pares. Filas con menos de dos columnas se ignoran."""
    pairs: List[Tuple[str, str]] = []
    for row in csv.reader(io.StringIO("\n".join(_data_lines(text)))):
        if len(row) < 2 or not row[0].strip():
            continue
        pairs.append((row[0].strip(), row[1].strip()))
    return pairs


def parse_keys(text: str) -> List[str]:
    """Una clave por línea."""
    return [line.strip() for line in _data_lines(text)]


def load_demonyms(path: Optional[str | Path] = None) -> LookupTable:
    return LookupTable(parse_pairs(read_resource_text(DEMONYMS_FILE, path)), case_sensitive=False)


def load_custom_substitutions(path: Optional[str | Path] = None) -> LookupTable:
    return LookupTable(parse_pairs(read_resource_text(CUSTOM_SUBSTITUTION_FILE, path)), case_sensitive=False)


def load_person_to_place(path: Optional[str | Path] = None) -> LookupTable:
    # Sensible a mayúsculas: los nombres de persona lo son más que lugares/gentilicios
    return LookupTable(parse_pairs(read_resource_text(PERSON_TO_PLACE_FILE, path)), case_sensitive=True)


def load_location_blacklist(path: Optional[str | Path] = None) -> MembershipSet:
    return MembershipSet(parse_keys(read_resource_text(LOCATION_BLACKLIST_FILE, path)), case_sensitive=False)
