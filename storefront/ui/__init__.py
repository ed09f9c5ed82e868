"""Search box state: debouncing, pagination, infinite scroll and views."""

from .debounce import Debouncer  # noqa: F401
from .pager import ManualVisibilityObserver, PollingVisibilityObserver, ScrollPager  # noqa: F401
from .presentation import PageView, render  # noqa: F401
from .session import SearchSession  # noqa: F401
from .state import Phase, SearchState, reduce  # noqa: F401
