"""
Shared fixtures: application on the testing config (in-memory SQLite),
HTTP client, snapshot record factory and a small seeded catalogue.
"""
from datetime import datetime

import pytest

from lombok_heritage import create_app, db
from lombok_heritage.models import (
    HeritageCategory, CulturalSite, TourismRoute, RouteSite, SiteReview
)
from lombok_heritage.services.snapshot import SiteRecord


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_site():
    """Factory for SiteRecord with sensible defaults"""
    counter = {'next_id': 1}

    def _make(**overrides):
        values = {
            'id': counter['next_id'],
            'name': f"Site {counter['next_id']}",
            'latitude': -8.58,
            'longitude': 116.10,
        }
        values.update(overrides)
        counter['next_id'] = max(counter['next_id'], values['id']) + 1
        return SiteRecord(**values)

    return _make


@pytest.fixture
def seeded(app):
    """
    Two categories (one unused), three active sites and one inactive,
    two routes and three reviews.
    """
    temple = HeritageCategory(name='Pura', color_hex='#f59e0b')
    village = HeritageCategory(name='Desa Adat', color_hex='#8b5cf6')
    unused = HeritageCategory(name='Situs Arkeologi', color_hex='#14b8a6')
    db.session.add_all([temple, village, unused])
    db.session.flush()

    meru = CulturalSite(
        name='Pura Meru', category_id=temple.id, latitude=-8.5850, longitude=116.1010,
        preservation_status='critical', cultural_significance_score=3,
        tourism_popularity_score=9, established_year=1500, is_unesco_site=True,
        verified_at=datetime(2026, 3, 1), created_at=datetime(2026, 3, 15, 10, 0)
    )
    lingsar = CulturalSite(
        name='Pura Lingsar', category_id=temple.id, latitude=-8.5790, longitude=116.1640,
        preservation_status='good', cultural_significance_score=9,
        tourism_popularity_score=5, established_year=1714,
        created_at=datetime(2026, 5, 2, 8, 30)
    )
    sade = CulturalSite(
        name='Desa Sade', category_id=village.id, latitude=-8.8390, longitude=116.2920,
        preservation_status='excellent', cultural_significance_score=10,
        tourism_popularity_score=2, established_year=2000,
        verified_at=datetime(2026, 6, 1), created_at=datetime(2026, 6, 20, 9, 0)
    )
    closed = CulturalSite(
        name='Closed Site', category_id=village.id, latitude=-8.70, longitude=116.20,
        preservation_status='poor', is_active=False, created_at=datetime(2026, 6, 21)
    )
    db.session.add_all([meru, lingsar, sade, closed])
    db.session.flush()

    city_route = TourismRoute(name='Jejak Kerajaan', is_active=True,
                              created_at=datetime(2026, 7, 1))
    # Stops inserted out of order on purpose
    city_route.route_sites.append(RouteSite(site_id=lingsar.id, sequence_order=2,
                                            visit_duration_minutes=45))
    city_route.route_sites.append(RouteSite(site_id=meru.id, sequence_order=1,
                                            visit_duration_minutes=None))

    drawn_route = TourismRoute(
        name='Coast Road', is_active=False, created_at=datetime(2026, 7, 2),
        route_coordinates={'type': 'LineString',
                           'coordinates': [[116.10, -8.58], [116.20, -8.70], [116.29, -8.84]]}
    )
    drawn_route.route_sites.append(RouteSite(site_id=meru.id, sequence_order=1))
    drawn_route.route_sites.append(RouteSite(site_id=sade.id, sequence_order=2))
    db.session.add_all([city_route, drawn_route])

    db.session.add_all([
        SiteReview(site_id=meru.id, reviewer_name='Lalu', rating=5, is_verified=True,
                   created_at=datetime(2026, 7, 3)),
        SiteReview(site_id=meru.id, reviewer_name='Baiq', rating=4, is_verified=True,
                   created_at=datetime(2026, 7, 4)),
        SiteReview(site_id=sade.id, reviewer_name='Jonas', rating=1, is_verified=False,
                   created_at=datetime(2026, 7, 5)),
    ])
    db.session.commit()

    return {
        'categories': {'temple': temple.id, 'village': village.id, 'unused': unused.id},
        'sites': {'meru': meru.id, 'lingsar': lingsar.id, 'sade': sade.id, 'closed': closed.id},
        'routes': {'city': city_route.id, 'drawn': drawn_route.id},
    }
