from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field

from .config import settings
from .lttb import downsample


class AdaptivePolicy(BaseModel):
    """
    Échantillonner seulement au-delà de `threshold`, et alors réduire à `target_points`.

    Un jeu de données juste au-dessus du seuil n'est pas plus compressé qu'un
    jeu bien au-dessus : les deux tombent à target_points.
    """

    threshold: int = Field(default_factory=lambda: settings.adaptive_threshold)
    target_points: int = Field(default_factory=lambda: settings.adaptive_target_points)


def adaptive_sample(
    data: Sequence[Any],
    policy: Optional[AdaptivePolicy] = None,
    x_key: Optional[str] = None,
    y_key: Optional[str] = None,
) -> Sequence[Any]:
    policy = policy or AdaptivePolicy()
    if len(data) <= policy.threshold:
        return data
    return downsample(data, policy.target_points, x_key, y_key)


def should_show_markers(original_length: int, limit: Optional[int] = None) -> bool:
    """Marqueurs visibles si la série *d'origine* (avant échantillonnage) est petite."""
    if limit is None:
        limit = settings.marker_limit
    return original_length <= limit


def summarize(original_length: int, returned_length: int) -> dict[str, Any]:
    """Compteurs renvoyés avec une série échantillonnée."""
    reduction = 0.0
    if original_length > 0:
        reduction = round(100.0 * (original_length - returned_length) / original_length, 1)
    return {
        "original_points": original_length,
        "returned_points": returned_length,
        "reduction_pct": reduction,
        "show_markers": should_show_markers(original_length),
    }
