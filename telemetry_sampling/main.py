from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime as dt
import logging

from .config import settings, get_sampling_constraints
from .keys import ResolutionError, resolve_keys
from .lttb import smart_downsample
from .models import SampleRequest, SampleResponse
from .policy import AdaptivePolicy, adaptive_sample, summarize

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Telemetry sampling API (LTTB)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ----------------------
# Constraints
# ----------------------
@app.get("/api/constraints")
def api_constraints():
    return get_sampling_constraints()

# ----------------------
# Sampling
# ----------------------
@app.post("/sample", response_model=SampleResponse)
def sample(request: SampleRequest):
    readings = request.readings

    if request.adaptive and request.method != "lttb":
        raise HTTPException(422, "Le mode adaptatif n'utilise que la méthode lttb")

    try:
        if request.adaptive:
            policy = AdaptivePolicy(
                **request.model_dump(include={"threshold", "target_points"}, exclude_none=True)
            )
            sampled = adaptive_sample(readings, policy, request.x_key, request.y_key)
        else:
            points = request.threshold if request.threshold is not None else settings.default_threshold
            sampled = smart_downsample(readings, points, request.method, request.x_key, request.y_key)

        x_key, y_key = request.x_key, request.y_key
        if sampled is not readings and request.method == "lttb":
            keys = resolve_keys(readings[0], request.x_key, request.y_key)
            x_key, y_key = keys.x, keys.y

    except ResolutionError as e:
        logger.warning(f"Clés non résolues: {e}")
        raise HTTPException(422, str(e))
    except Exception as e:
        logger.error(f"Erreur échantillonnage: {e}")
        raise HTTPException(500, f"Erreur échantillonnage: {str(e)}")

    logger.info(f"Échantillonnage {request.method}: {len(readings)} → {len(sampled)} points")

    return {
        "readings": list(sampled),
        "x_key": x_key,
        "y_key": y_key,
        "method": request.method,
        **summarize(len(readings), len(sampled)),
    }

# ----------------------
# Health
# ----------------------
@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "sampling": {
            "default_threshold": settings.default_threshold,
            "adaptive_threshold": settings.adaptive_threshold,
            "adaptive_target_points": settings.adaptive_target_points,
            "marker_limit": settings.marker_limit,
        },
        "timestamp": dt.utcnow().isoformat() + "Z",
    }
