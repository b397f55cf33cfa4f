from engine.seasonality.autocorrelation import Peak, SeasonalityAnalysis, analyze, autocorrelation

__all__ = ["Peak", "SeasonalityAnalysis", "analyze", "autocorrelation"]
