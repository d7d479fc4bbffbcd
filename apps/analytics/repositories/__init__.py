from .cached import cache_heavy_query
from .dashboard import DashboardRepository
from .performance import monitor_query_performance

__all__ = ['cache_heavy_query', 'DashboardRepository', 'monitor_query_performance']
