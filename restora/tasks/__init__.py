from .progress import ProgressTicker
from .restoration import ErrorNotice, RestorationWorkflow

__all__ = [
    "ErrorNotice",
    "ProgressTicker",
    "RestorationWorkflow",
]
