"""
Lombok Heritage Services - Spatial, scoring and reporting analytics
"""
from lombok_heritage.services.spatial_analysis import SpatialAnalysisService
from lombok_heritage.services.route_planner import RoutePlanner
from lombok_heritage.services.recommendation_service import RecommendationService
from lombok_heritage.services.dashboard_service import DashboardService

__all__ = ['SpatialAnalysisService', 'RoutePlanner', 'RecommendationService', 'DashboardService']
