from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Configuration centralisée du moteur d'échantillonnage et de l'API."""

    # Échantillonnage LTTB
    default_threshold: int = 500
    min_threshold: int = 3

    # Politique adaptative
    adaptive_threshold: int = 500
    adaptive_target_points: int = 300

    # Marqueurs visibles jusqu'à cette taille (longueur d'origine)
    marker_limit: int = 100

    # Contraintes API
    points_min: int = 3
    points_max: int = 20000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        # Permet de mapper DEFAULT_THRESHOLD -> default_threshold, etc.
        case_sensitive = False

# Instance globale de configuration
settings = Settings()

def get_sampling_constraints():
    """Retourne les contraintes d'échantillonnage pour le frontend."""
    return {
        "points": {
            "min": settings.points_min,
            "max": settings.points_max,
            "default": settings.default_threshold,
        },
        "adaptive": {
            "threshold": settings.adaptive_threshold,
            "target_points": settings.adaptive_target_points,
        },
        "markers": {
            "max_points": settings.marker_limit,
        },
    }
