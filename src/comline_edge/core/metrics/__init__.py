from .lookup import RESULT_FAILURE, RESULT_SUCCESS, LookupMetrics

__all__ = ["LookupMetrics", "RESULT_SUCCESS", "RESULT_FAILURE"]
