# -*- coding: utf-8 -*-
"""
extractor/metrics.py

Métricas prácticas para auditar la salida de la resolución de entidades.
"""
from __future__ import annotations
from typing import Any, Dict, Union
import pandas as pd

from .schemas import ExtractedEntities

_COLUMNS = ["category", "text", "position", "sentence_id"]


def _as_dict(entities: Union[ExtractedEntities, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(entities, ExtractedEntities):
        return entities.model_dump(mode="json")
    return entities


def occurrences_frame(entities: Union[ExtractedEntities, Dict[str, Any]]) -> pd.DataFrame:
    """Una fila por ocurrencia (personas, organizaciones, lugares en ese orden)."""
    d = _as_dict(entities)
    rows = [*d.get("persons", []), *d.get("organizations", []), *d.get("locations", [])]
    if not rows:
        return pd.DataFrame(columns=_COLUMNS)
    return pd.DataFrame.from_records(rows).reindex(columns=_COLUMNS)


def category_summary(entities: Union[ExtractedEntities, Dict[str, Any]]) -> pd.DataFrame:
    """Conteo de ocurrencias y de textos distintos por categoría."""
    df = occurrences_frame(entities)
    if df.empty:
        return pd.DataFrame(columns=["occurrences", "distinct"]).rename_axis("category")
    return df.groupby("category").agg(
        occurrences=("text", "size"),
        distinct=("text", "nunique"),
    )


def top_entities(entities: Union[ExtractedEntities, Dict[str, Any]], category: str, n: int = 10) -> pd.DataFrame:
    """Textos más mencionados de una categoría (PERSON/LOCATION/ORGANIZATION)."""
    df = occurrences_frame(entities)
    sub = df[df["category"] == category.upper()]
    if sub.empty:
        return pd.DataFrame(columns=["text", "count"]).set_index("text")
    return sub["text"].value_counts().head(n).rename_axis("text").to_frame("count")
