"""Tests for the catalogue models and the snapshot loaders."""
from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from lombok_heritage import db
from lombok_heritage.data_acquisition.demo_data_generator import LombokDemoDataGenerator
from lombok_heritage.models import (
    HeritageCategory, CulturalSite, TourismRoute, RouteSite, SiteReview
)
from lombok_heritage.models.cultural_site import PRESERVATION_STATUSES
from lombok_heritage.services.recommendation_service import PRESERVATION_STATUS_SCORES
from lombok_heritage.services.snapshot import (
    load_catalogue, load_route, load_routes, load_sites
)


class TestModels:

    def test_site_to_dict(self, seeded):
        site = db.session.get(CulturalSite, seeded['sites']['meru'])
        data = site.to_dict()
        assert data['name'] == 'Pura Meru'
        assert data['category_name'] == 'Pura'
        assert data['is_unesco_site'] is True

    def test_category_and_review_to_dict(self, seeded):
        category = db.session.get(HeritageCategory, seeded['categories']['temple'])
        assert category.to_dict()['color_hex'] == '#f59e0b'
        assert category.sites.count() == 2

        review = SiteReview.query.filter_by(reviewer_name='Jonas').one()
        assert review.to_dict()['site_name'] == 'Desa Sade'
        assert review.to_dict()['created_at'] == '2026-07-05T00:00:00'

    def test_route_stops_ordered_by_sequence(self, seeded):
        route = db.session.get(TourismRoute, seeded['routes']['city'])
        assert [rs.sequence_order for rs in route.route_sites] == [1, 2]
        assert route.route_sites[0].site.name == 'Pura Meru'
        assert route.to_dict()['is_active'] is True

    def test_sequence_order_unique_per_route(self, seeded):
        db.session.add(RouteSite(route_id=seeded['routes']['city'],
                                 site_id=seeded['sites']['sade'], sequence_order=1))
        with pytest.raises(IntegrityError):
            db.session.commit()
        db.session.rollback()


class TestSnapshotLoaders:

    def test_load_sites_active_only(self, seeded):
        names = [s.name for s in load_sites()]
        assert 'Closed Site' not in names
        assert len(load_sites(active_only=False)) == 4

    def test_load_sites_by_id(self, seeded):
        sites = load_sites(site_ids=[seeded['sites']['sade']])
        assert [s.category_color for s in sites] == ['#8b5cf6']

    def test_load_routes(self, seeded):
        assert [r.name for r in load_routes()] == ['Jejak Kerajaan']
        # Newest first
        assert [r.name for r in load_routes(active_only=False)] == ['Coast Road', 'Jejak Kerajaan']

    def test_load_route(self, seeded):
        route = load_route(seeded['routes']['city'])
        assert [wp.site.name for wp in route.waypoints] == ['Pura Meru', 'Pura Lingsar']
        assert load_route(999) is None

    def test_load_catalogue(self, seeded):
        snapshot = load_catalogue()
        assert len(snapshot.sites) == 4
        assert len(snapshot.categories) == 3
        assert len(snapshot.reviews) == 3
        assert len(snapshot.routes) == 2


class TestDemoDataGenerator:

    def test_generate(self, app):
        counts = LombokDemoDataGenerator(seed=7, now=datetime(2026, 7, 1)).generate()

        assert counts['categories'] == 7
        assert counts['sites'] == 14
        assert counts['routes'] == 3
        assert CulturalSite.query.count() == 14
        assert SiteReview.query.count() == counts['reviews']

        bayan = TourismRoute.query.filter_by(name='Wetu Telu Bayan').one()
        assert bayan.route_coordinates['type'] == 'LineString'



class TestCli:

    def test_init_db_and_seed_demo(self, app):
        runner = app.test_cli_runner()

        result = runner.invoke(args=['init-db'])
        assert 'Database tables created' in result.output

        result = runner.invoke(args=['seed-demo', '--seed', '5'])
        assert result.exit_code == 0
        assert 'sites: 14' in result.output

        # Second run leaves existing data alone
        result = runner.invoke(args=['seed-demo'])
        assert 'skipping' in result.output
        assert CulturalSite.query.count() == 14


def test_every_stored_status_has_a_priority_score():
    assert set(PRESERVATION_STATUSES) == set(PRESERVATION_STATUS_SCORES)
