import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOAD_ERROR = "Error al cargar datos"


def normalize_error(err: Any, fallback: str = DEFAULT_LOAD_ERROR) -> str:
    """Turn whatever was raised (exception, string, None) into a displayable message."""
    if not err:
        return fallback
    if isinstance(err, str):
        return err
    if isinstance(err, BaseException):
        return str(err) or fallback
    message = getattr(err, "message", None)
    if isinstance(message, str):
        return message
    return fallback


class PageState:
    """
    Load/error/data state of one screen.

    A failed load() replaces the state with an error; nothing is rendered
    partially, and retry() repeats the last loader. A failed run_action()
    only sets action_error: the data already loaded is kept.
    """

    def __init__(self):
        self.loading = False
        self.error: Optional[str] = None
        self.data: Any = None
        self.action_error: Optional[str] = None
        self._loader: Optional[Callable[[], Any]] = None

    @property
    def ready(self) -> bool:
        return not self.loading and self.error is None

    def load(self, loader: Callable[[], Any]) -> Any:
        self._loader = loader
        self.loading = True
        self.error = None
        try:
            self.data = loader()
        except Exception as e:
            logger.warning(f"Page load failed: {e}")
            self.data = None
            self.error = normalize_error(e)
        finally:
            self.loading = False
        return self.data

    def retry(self) -> Any:
        if self._loader is None:
            raise RuntimeError("retry() called before load()")
        return self.load(self._loader)

    def run_action(self, action: Callable[[], Any], reload: bool = False) -> Any:
        """Run a mutation; returns its result, or None if it failed."""
        self.action_error = None
        try:
            result = action()
        except Exception as e:
            logger.warning(f"Action failed: {e}")
            self.action_error = normalize_error(e, "Error al guardar")
            return None
        if reload and self._loader is not None:
            self.load(self._loader)
        return result
