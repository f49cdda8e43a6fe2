"""
Snapshot records
Immutable, flat views of catalogue rows handed to the analytics services.

The analytics layer never touches SQLAlchemy sessions: controllers load a
snapshot once per request and every derived value is computed from it.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class SiteRecord:
    """Cultural site joined with its category display fields"""
    id: int
    name: str
    latitude: float
    longitude: float
    preservation_status: Optional[str] = None
    cultural_significance_score: Optional[float] = None
    tourism_popularity_score: Optional[float] = None
    established_year: Optional[int] = None
    is_unesco_site: bool = False
    local_name: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    is_active: bool = True
    verified_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def point(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    @classmethod
    def from_model(cls, site) -> 'SiteRecord':
        category = site.category
        return cls(
            id=site.id,
            name=site.name or 'Unknown Site',
            latitude=site.latitude,
            longitude=site.longitude,
            preservation_status=site.preservation_status,
            cultural_significance_score=site.cultural_significance_score,
            tourism_popularity_score=site.tourism_popularity_score,
            established_year=site.established_year,
            is_unesco_site=bool(site.is_unesco_site),
            local_name=site.local_name,
            category_id=site.category_id,
            category_name=category.name if category else None,
            category_color=category.color_hex if category else None,
            is_active=bool(site.is_active),
            verified_at=site.verified_at,
            created_at=site.created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'local_name': self.local_name,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'category_name': self.category_name,
            'category_color': self.category_color,
            'preservation_status': self.preservation_status,
            'cultural_significance_score': self.cultural_significance_score,
            'tourism_popularity_score': self.tourism_popularity_score,
            'established_year': self.established_year,
            'is_unesco_site': self.is_unesco_site,
        }


@dataclass(frozen=True)
class RouteWaypoint:
    """A route stop resolved to its site"""
    site: SiteRecord
    sequence_order: int
    visit_duration_minutes: Optional[int] = None


@dataclass(frozen=True)
class RouteRecord:
    id: int
    name: str
    waypoints: Tuple[RouteWaypoint, ...] = ()
    route_coordinates: Optional[Dict[str, Any]] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, route) -> 'RouteRecord':
        waypoints = tuple(
            RouteWaypoint(
                site=SiteRecord.from_model(rs.site),
                sequence_order=rs.sequence_order,
                visit_duration_minutes=rs.visit_duration_minutes,
            )
            for rs in route.route_sites
            if rs.site is not None
        )
        return cls(
            id=route.id,
            name=route.name,
            waypoints=waypoints,
            route_coordinates=route.route_coordinates,
            is_active=bool(route.is_active),
            created_at=route.created_at,
        )


@dataclass(frozen=True)
class CategoryRecord:
    id: int
    name: str
    color_hex: Optional[str] = None

    @classmethod
    def from_model(cls, category) -> 'CategoryRecord':
        return cls(id=category.id, name=category.name, color_hex=category.color_hex)


@dataclass(frozen=True)
class ReviewRecord:
    id: int
    site_id: int
    rating: int
    is_verified: bool = False
    reviewer_name: Optional[str] = None
    site_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, review) -> 'ReviewRecord':
        return cls(
            id=review.id,
            site_id=review.site_id,
            rating=review.rating,
            is_verified=bool(review.is_verified),
            reviewer_name=review.reviewer_name,
            site_name=review.site.name if review.site else None,
            created_at=review.created_at,
        )


@dataclass
class CatalogueSnapshot:
    """Everything the dashboard needs, fetched in one go"""
    sites: List[SiteRecord] = field(default_factory=list)
    categories: List[CategoryRecord] = field(default_factory=list)
    reviews: List[ReviewRecord] = field(default_factory=list)
    routes: List[RouteRecord] = field(default_factory=list)


# ============================================================================
# LOADERS (database -> snapshot)
# ============================================================================

def load_sites(active_only: bool = True, site_ids=None) -> List[SiteRecord]:
    """Load site records, optionally restricted to active sites or given ids"""
    from lombok_heritage.models import CulturalSite

    query = CulturalSite.query
    if active_only:
        query = query.filter_by(is_active=True)
    if site_ids is not None:
        query = query.filter(CulturalSite.id.in_(list(site_ids)))
    return [SiteRecord.from_model(s) for s in query.order_by(CulturalSite.id).all()]


def load_routes(active_only: bool = True) -> List[RouteRecord]:
    from lombok_heritage.models import TourismRoute

    query = TourismRoute.query
    if active_only:
        query = query.filter_by(is_active=True)
    routes = query.order_by(TourismRoute.created_at.desc(), TourismRoute.id.desc()).all()
    return [RouteRecord.from_model(r) for r in routes]


def load_route(route_id: int) -> Optional[RouteRecord]:
    from lombok_heritage import db
    from lombok_heritage.models import TourismRoute

    route = db.session.get(TourismRoute, route_id)
    return RouteRecord.from_model(route) if route else None


def load_catalogue() -> CatalogueSnapshot:
    """Load the full catalogue (inactive rows included) for dashboard statistics"""
    from lombok_heritage.models import HeritageCategory, SiteReview

    return CatalogueSnapshot(
        sites=load_sites(active_only=False),
        categories=[CategoryRecord.from_model(c) for c in HeritageCategory.query.all()],
        reviews=[ReviewRecord.from_model(r) for r in SiteReview.query.all()],
        routes=load_routes(active_only=False),
    )
