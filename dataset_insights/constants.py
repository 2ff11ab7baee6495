# fixed design constants
TYPE_DOMINANCE_RATIO = 0.8
ROW_MISSING_THRESHOLD = 0.5

CORRELATION_MIN_PAIRS = 5          # strictly more pairs required
CORRELATION_THRESHOLD = 0.5
CORRELATION_IMPORTANCE_SCALE = 8

OUTLIER_SIGMA = 3.0
OUTLIER_MAX_IMPORTANCE = 10

TREND_MIN_POINTS = 10              # strictly more points required
TREND_SLOPE_THRESHOLD = 0.01
TREND_IMPORTANCE_SCALE = 100
TREND_MAX_IMPORTANCE = 9

DISTRIBUTION_MAX_UNIQUE = 15
DISTRIBUTION_MAX_UNIQUE_RATIO = 0.1
DISTRIBUTION_TOP_N = 5
DISTRIBUTION_IMPORTANCE = 6
DISTRIBUTION_CHART_CATEGORIES = 10
CATEGORY_LABEL_MAX_LEN = 15

SUMMARY_IMPORTANCE = 10

SMOOTHING_POLYORDER = 2
SMOOTHING_MAX_WINDOW = 9
VALIDATION_FRACTION = 0.2
SEASONALITY_MIN_SUBSET = 5         # strictly more lagged pairs required
FORECAST_MODEL_LABEL = "Seasonal Decomposition (SARIMA-style)"

DEFAULT_CONFIG = {
    "max_rows": 250000,
    "forecast": {
        "enabled": True,
        "horizon": 10,
        "candidate_periods": [7, 12, 4, 30],
        "default_period": 7,
        "min_points": 20,
    },
    "output": {
        "include_cleaned_data": True,
    },
    "logging": {
        "level": "INFO",
    },
}
