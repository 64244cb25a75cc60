"""Physics-based plant power models and single-chiller prediction gating."""

from thermotrace.physics.regression import (
    CHILLER_MODELS,
    ChillerModelCoefficients,
    ModelStats,
    PowerDeviation,
    check_power_deviation,
    get_model_stats,
    polynomial_features,
    predict_chiller1_power,
    predict_chiller2_power,
    predict_chiller3_power,
    predict_chiller_power,
    predict_power,
)
from thermotrace.physics.selection import (
    ActiveChillerPrediction,
    PredictedEfficiency,
    get_efficiency,
    get_physics_predictions,
    get_predicted_efficiency,
    is_running_for_model,
    running_chillers,
    select_active_chiller_prediction,
)

__all__ = [
    "CHILLER_MODELS",
    "ActiveChillerPrediction",
    "ChillerModelCoefficients",
    "ModelStats",
    "PowerDeviation",
    "PredictedEfficiency",
    "check_power_deviation",
    "get_efficiency",
    "get_model_stats",
    "get_physics_predictions",
    "get_predicted_efficiency",
    "is_running_for_model",
    "polynomial_features",
    "predict_chiller1_power",
    "predict_chiller2_power",
    "predict_chiller3_power",
    "predict_chiller_power",
    "predict_power",
    "running_chillers",
    "select_active_chiller_prediction",
]
