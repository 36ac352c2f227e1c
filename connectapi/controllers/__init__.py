from connectapi.controllers.page import SearchPage
from connectapi.controllers.search import SearchController
from connectapi.controllers.selection import SelectionTracker
from connectapi.controllers.trending import TrendingProvider

__all__ = ["SearchController", "SearchPage", "SelectionTracker", "TrendingProvider"]
