from engine.trend.regression import TrendAnalysis, analyze

__all__ = ["TrendAnalysis", "analyze"]
