import logging
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from .config import settings
from .keys import SeriesKeys, coordinates, resolve_keys, x_coordinates, y_coordinates

logger = logging.getLogger(__name__)


def clamp_threshold(threshold: int) -> int:
    # Premier point + dernier point + au moins un bucket
    return max(settings.min_threshold, int(threshold))


# ----------------------
# Buckets
# ----------------------
def bucket_range(index: int, length: int, threshold: int) -> tuple[int, int]:
    """
    Bornes [start, end) du bucket `index` sur les indices intérieurs.

    Largeur réelle w = (length - 2) / (threshold - 2), bornes floor(i*w) + 1.
    Le floor est calculé en entiers : la partition couvre toujours 1..length-2.
    """
    interior = length - 2
    buckets = threshold - 2
    start = (index * interior) // buckets + 1
    end = ((index + 1) * interior) // buckets + 1
    return start, end


def next_bucket_range(index: int, length: int, threshold: int) -> tuple[int, int]:
    """Bucket suivant (pour la moyenne uniquement), tronqué à la fin des données."""
    start, end = bucket_range(index + 1, length, threshold)
    end = min(end, length)
    return min(start, end), end


def next_bucket_centroid(xs: np.ndarray, ys: np.ndarray, start: int, end: int) -> tuple[float, float]:
    # Bucket vide: repli historique sur (0, 0)
    if end <= start:
        return 0.0, 0.0
    return float(xs[start:end].mean()), float(ys[start:end].mean())


# ----------------------
# Triangles
# ----------------------
def triangle_areas(
    xs: np.ndarray,
    ys: np.ndarray,
    start: int,
    end: int,
    prev: int,
    centroid: tuple[float, float],
) -> np.ndarray:
    """Score (aire du triangle prev / candidat / centroïde) de chaque candidat du bucket."""
    prev_x, prev_y = xs[prev], ys[prev]
    avg_x, avg_y = centroid
    return 0.5 * np.abs(
        (prev_x - avg_x) * (ys[start:end] - prev_y)
        - (prev_x - xs[start:end]) * (avg_y - prev_y)
    )


def select_in_bucket(
    xs: np.ndarray,
    ys: np.ndarray,
    start: int,
    end: int,
    prev: int,
    centroid: tuple[float, float],
) -> int:
    """Indice de plus grande aire; à égalité le premier rencontré l'emporte."""
    areas = triangle_areas(xs, ys, start, end, prev, centroid)
    valid = ~np.isnan(areas)
    if not valid.any():
        return start
    # argmax renvoie la première occurrence du maximum
    return start + int(np.argmax(np.where(valid, areas, -1.0)))


# ----------------------
# LTTB
# ----------------------
def lttb_indices(xs: np.ndarray, ys: np.ndarray, threshold: int) -> list[int]:
    """
    Indices retenus par LTTB sur des coordonnées déjà extraites.

    Renvoie tous les indices si la série tient déjà dans le seuil.
    """
    length = len(xs)
    threshold = clamp_threshold(threshold)
    if length <= threshold:
        return list(range(length))

    indices = [0]
    prev = 0  # Le premier point est le sommet initial du triangle

    for i in range(threshold - 2):
        avg_start, avg_end = next_bucket_range(i, length, threshold)
        centroid = next_bucket_centroid(xs, ys, avg_start, avg_end)

        start, end = bucket_range(i, length, threshold)
        prev = select_in_bucket(xs, ys, start, end, prev, centroid)
        indices.append(prev)

    indices.append(length - 1)
    return indices


def downsample(
    data: Sequence[Any],
    threshold: int = settings.default_threshold,
    x_key: Optional[str] = None,
    y_key: Optional[str] = None,
) -> Sequence[Any]:
    """
    Réduit une séquence ordonnée d'enregistrements à `threshold` points (LTTB).

    Args:
        data: enregistrements triés par x (dict, modèle pydantic, dataclass...)
        threshold: nombre de points en sortie, ramené à 3 minimum
        x_key / y_key: champs explicites; inférés sinon (voir resolve_keys)

    Returns:
        `data` lui-même si len(data) <= threshold, sinon une liste des mêmes
        enregistrements, dans l'ordre, premier et dernier inclus.
    """
    threshold = clamp_threshold(threshold)
    if len(data) <= threshold:
        return data

    keys = resolve_keys(data[0], x_key, y_key)
    xs, ys = coordinates(data, keys)
    indices = lttb_indices(xs, ys, threshold)

    logger.debug(f"LTTB {keys.x}/{keys.y}: {len(data)} → {len(indices)} points")
    return [data[i] for i in indices]


def downsample_series(data: Sequence[Any], keys: SeriesKeys, threshold: int = settings.default_threshold) -> Sequence[Any]:
    """downsample() avec des accesseurs déclarés (ex: BATTERY_VOLTAGE)."""
    return downsample(data, threshold, x_key=keys.x, y_key=keys.y)


def downsample_frame(
    df: pd.DataFrame,
    threshold: int = settings.default_threshold,
    x_key: Optional[str] = None,
    y_key: Optional[str] = None,
) -> pd.DataFrame:
    """Même moteur sur un DataFrame : les colonnes jouent le rôle des champs."""
    threshold = clamp_threshold(threshold)
    if len(df) <= threshold:
        return df

    keys = resolve_keys(df.iloc[0].to_dict(), x_key, y_key)
    xs = x_coordinates(df[keys.x])
    ys = y_coordinates(df[keys.y])
    indices = lttb_indices(xs, ys, threshold)

    logger.debug(f"LTTB DataFrame {keys.x}/{keys.y}: {len(df)} → {len(indices)} points")
    return df.iloc[indices]


# ----------------------
# Alternative uniforme
# ----------------------
def downsample_uniform(data: Sequence[Any], threshold: int = settings.default_threshold) -> Sequence[Any]:
    """Sélection à pas constant, premier et dernier points inclus."""
    threshold = clamp_threshold(threshold)
    if len(data) <= threshold:
        return data
    bins = np.linspace(0, len(data) - 1, threshold, dtype=int)
    return [data[int(i)] for i in bins]


# Fonction wrapper pour l'endpoint
def smart_downsample(
    data: Sequence[Any],
    points: int,
    method: str = "lttb",
    x_key: Optional[str] = None,
    y_key: Optional[str] = None,
) -> Sequence[Any]:
    """
    Downsampling selon la méthode demandée.

    Args:
        data: enregistrements triés par x
        points: nombre de points cibles
        method: "lttb" (défaut) ou "uniform"
    """
    if method == "uniform":
        return downsample_uniform(data, points)
    if method == "lttb":
        return downsample(data, points, x_key, y_key)
    raise ValueError(f"Méthode inconnue: {method} (lttb|uniform)")
