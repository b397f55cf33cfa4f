from engine.aggregate.merge import expected_value, merge, summarize

__all__ = ["expected_value", "merge", "summarize"]
