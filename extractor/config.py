"""Configuración tipada para la extracción de entidades."""
from __future__ import annotations
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml


class Model(str, Enum):
    """
    Modelos NER soportados. El nombre es el que se usa en config;
    el valor es el pipeline spaCy que lo implementa.
    """
    # No cambiar el orden: el primero es el default
    ENGLISH_ALL_3CLASS = "en_core_web_sm"
    ENGLISH_CONLL_4CLASS = "en_core_web_md"
    SPANISH_ANCORA = "es_core_news_sm"
    GERMAN_DEWAC = "de_core_news_sm"

    @classmethod
    def from_name(cls, name: str) -> "Model":
        try:
            return cls[(name or "").strip().upper()]
        except KeyError:
            valid = ", ".join(m.name for m in cls)
            raise ValueError(f"modelo NER desconocido: {name!r} (válidos: {valid})") from None


@dataclass(slots=True)
class ExtractorConfig:
    ner_model: str = Model.ENGLISH_ALL_3CLASS.name
    manually_replace_demonyms: bool = False    # reescribe gentilicios antes de clasificar (lento)
    spacy_model: Optional[str] = None          # pisa el pipeline asociado a ner_model
    spacy_disable: Tuple[str, ...] = ("lemmatizer", "textcat", "parser")
    # Rutas opcionales; None = recurso empaquetado en extractor/resources
    demonyms_path: Optional[str] = None
    custom_substitutions_path: Optional[str] = None
    location_blacklist_path: Optional[str] = None
    person_to_place_path: Optional[str] = None

    def __post_init__(self) -> None:
        self.ner_model = Model.from_name(self.ner_model).name
        self.spacy_disable = tuple(self.spacy_disable or ())

    @property
    def model(self) -> Model:
        return Model[self.ner_model]

    @property
    def pipeline_name(self) -> str:
        return self.spacy_model or self.model.value

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["spacy_disable"] = list(self.spacy_disable)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractorConfig":
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"claves de configuración desconocidas: {unknown}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ExtractorConfig":
        """Lee un mapeo YAML (opcionalmente bajo la clave `extractor`)."""
        conf = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if "extractor" in conf:
            conf = conf["extractor"] or {}
        return cls.from_dict(conf)
