from .documents import split_documents
from .loader import deep_merge, load_chart, merge_values, parse_set_values
from .model import Chart

__all__ = [
    "Chart",
    "load_chart",
    "merge_values",
    "deep_merge",
    "parse_set_values",
    "split_documents",
]
