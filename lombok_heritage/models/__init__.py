"""
Lombok Heritage - Database Models
"""
from lombok_heritage.models.category import HeritageCategory
from lombok_heritage.models.cultural_site import CulturalSite
from lombok_heritage.models.tourism_route import TourismRoute, RouteSite
from lombok_heritage.models.site_review import SiteReview

__all__ = [
    # Catalogue
    'HeritageCategory',
    'CulturalSite',

    # Tourism
    'TourismRoute',
    'RouteSite',

    # Community
    'SiteReview',
]
