import dataclasses
import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd
from pydantic import BaseModel

# Champs x reconnus par défaut, par ordre de préférence
DEFAULT_X_KEYS = ("time", "timestamp")


class ResolutionError(ValueError):
    """Aucune clé explicite ni champ par défaut ne permet de déterminer l'axe x ou y."""


@dataclass(frozen=True)
class SeriesKeys:
    """Accesseurs déclarés d'une série : champ x (temps) et champ y (métrique)."""

    x: str
    y: str


# Séries batterie : une configuration du moteur générique, pas un code à part
BATTERY_VOLTAGE = SeriesKeys(x="timestamp", y="voltage")
BATTERY_TEMPERATURE = SeriesKeys(x="timestamp", y="temperature")


def is_number(value: Any) -> bool:
    # bool hérite de int mais n'est pas une mesure
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def field_names(record: Any) -> list[str]:
    """Noms des champs d'un enregistrement, dans leur ordre de déclaration."""
    if isinstance(record, Mapping):
        return list(record.keys())
    if isinstance(record, BaseModel):
        return list(type(record).model_fields)
    if dataclasses.is_dataclass(record):
        return [f.name for f in dataclasses.fields(record)]
    if hasattr(record, "_fields"):
        return list(record._fields)
    try:
        return list(vars(record))
    except TypeError:
        return []


def field_value(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record[key]
    return getattr(record, key)


def resolve_keys(
    record: Any,
    x_key: Optional[str] = None,
    y_key: Optional[str] = None,
) -> SeriesKeys:
    """
    Détermine les champs x et y à partir d'un enregistrement représentatif.

    - x : clé explicite, sinon "time", sinon "timestamp".
    - y : clé explicite, sinon le premier champ numérique (hors x) dans l'ordre
      de déclaration.

    L'inférence par nom n'est qu'une commodité : les appelants qui connaissent
    leur schéma passent x_key/y_key (ou un SeriesKeys).
    """
    names = field_names(record)

    if x_key is not None:
        if x_key not in names:
            raise ResolutionError(f"Clé x '{x_key}' absente de l'enregistrement (champs: {names})")
        resolved_x = x_key
    else:
        resolved_x = next((k for k in DEFAULT_X_KEYS if k in names), None)
        if resolved_x is None:
            raise ResolutionError(
                f"Impossible de déterminer la clé x: ni 'time' ni 'timestamp' (champs: {names})"
            )

    if y_key is not None:
        if y_key not in names:
            raise ResolutionError(f"Clé y '{y_key}' absente de l'enregistrement (champs: {names})")
        resolved_y = y_key
    else:
        resolved_y = next(
            (k for k in names if k != resolved_x and is_number(field_value(record, k))),
            None,
        )
        if resolved_y is None:
            raise ResolutionError(
                f"Impossible de déterminer la clé y: aucun champ numérique hors '{resolved_x}' (champs: {names})"
            )

    return SeriesKeys(x=resolved_x, y=resolved_y)


def to_epoch_ms(value: Any) -> float:
    """
    Coordonnée x géométrique d'une valeur de temps.

    Les nombres sont utilisés tels quels; les chaînes date/heure, datetime et
    pd.Timestamp sont convertis en millisecondes epoch (naïf = UTC).
    """
    if is_number(value):
        return float(value)
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        return float("nan")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return float(ts.value // 1_000_000)


def _epoch_ms(index: pd.DatetimeIndex) -> np.ndarray:
    # asi8 suit la résolution de l'index: repasser en ns avant de convertir
    return (index.as_unit("ns").asi8 // 1_000_000).astype(float)


def x_coordinates(values) -> np.ndarray:
    """Vectorise to_epoch_ms sur une colonne ou une liste de valeurs x."""
    if isinstance(values, pd.Series):
        if pd.api.types.is_datetime64_any_dtype(values):
            # Convertir en timestamps Unix (millisecondes)
            return _epoch_ms(pd.DatetimeIndex(values))
        if pd.api.types.is_numeric_dtype(values):
            return values.astype(float).to_numpy()
        values = values.tolist()

    values = list(values)
    if all(is_number(v) for v in values):
        return np.asarray(values, dtype=float)
    if all(isinstance(v, str) for v in values):
        parsed = pd.to_datetime(values, utc=True, format="mixed")
        return _epoch_ms(parsed)
    return np.fromiter((to_epoch_ms(v) for v in values), dtype=float, count=len(values))


def y_coordinates(values) -> np.ndarray:
    if isinstance(values, pd.Series):
        return values.astype(float).to_numpy()
    return np.asarray(list(values), dtype=float)


def coordinates(data: Sequence[Any], keys: SeriesKeys) -> tuple[np.ndarray, np.ndarray]:
    """Tableaux (x, y) d'une séquence d'enregistrements, sans modifier les enregistrements."""
    xs = x_coordinates(field_value(r, keys.x) for r in data)
    ys = y_coordinates(field_value(r, keys.y) for r in data)
    return xs, ys
