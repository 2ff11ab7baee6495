class AnalysisError(Exception):
    """Base class for errors raised by the analysis engine."""


class ValidationError(AnalysisError):
    pass


class LoadError(AnalysisError):
    pass


class ForecastError(AnalysisError):
    """Forecasting failed; no partial forecast is returned."""


class InsufficientDataError(ForecastError):
    def __init__(self, required: int, available: int, what: str = "data points"):
        self.required = required
        self.available = available
        super().__init__(
            f"Need at least {required} {what} for forecasting. Currently have {available}."
        )
