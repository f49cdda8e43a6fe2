"""Tests for buffer zones, overlays, route polylines and spatial statistics."""
import pytest

from lombok_heritage.services.geo_math import distance_m
from lombok_heritage.services.spatial_analysis import (
    BUFFER_PALETTE, SpatialAnalysisService
)


# ============================================================================
# BUFFER ZONES
# ============================================================================

class TestCreateBufferZones:

    def test_one_zone_per_selected_site(self, make_site):
        sites = [make_site(), make_site(), make_site()]
        zones = SpatialAnalysisService.create_buffer_zones(sites, 750)

        assert len(zones) == 3
        assert [z.site_id for z in zones] == [s.id for s in sites]
        assert all(z.radius == 750 for z in zones)

    def test_duplicate_selection_yields_duplicate_zones(self, make_site):
        site = make_site()
        zones = SpatialAnalysisService.create_buffer_zones([site, site], 500)
        assert len(zones) == 2
        assert zones[0].site_id == zones[1].site_id

    def test_empty_selection(self):
        assert SpatialAnalysisService.create_buffer_zones([], 500) == []

    def test_center_is_lat_lng(self, make_site):
        zone = SpatialAnalysisService.create_buffer_zones(
            [make_site(latitude=-8.7, longitude=116.3)])[0]
        assert zone.center == (-8.7, 116.3)
        assert zone.to_dict()['center'] == [-8.7, 116.3]

    def test_category_colour_wins_over_palette(self, make_site):
        zones = SpatialAnalysisService.create_buffer_zones(
            [make_site(category_color='#123456'), make_site()])
        assert zones[0].color == '#123456'
        assert zones[1].color == BUFFER_PALETTE[1]

    def test_palette_wraps_around(self, make_site):
        sites = [make_site() for _ in range(len(BUFFER_PALETTE) + 1)]
        zones = SpatialAnalysisService.create_buffer_zones(sites)
        assert zones[-1].color == BUFFER_PALETTE[0]


class TestFindSitesInBuffer:

    def test_includes_nearby_and_excludes_far(self, make_site):
        near = make_site(latitude=-8.5850, longitude=116.1010)
        far = make_site(latitude=-8.8390, longitude=116.2920)
        found = SpatialAnalysisService.find_sites_in_buffer((-8.5846, 116.0993), [near, far], 500)
        assert found == [near]

    def test_radius_is_inclusive(self, make_site):
        center = (-8.58, 116.10)
        site = make_site(latitude=-8.59, longitude=116.10)
        exact = distance_m(center, site.point)
        assert SpatialAnalysisService.find_sites_in_buffer(center, [site], exact) == [site]


# ============================================================================
# OVERLAYS
# ============================================================================

class TestOverlays:

    def test_defaults(self):
        overlays = SpatialAnalysisService.default_overlays()
        assert [o.id for o in overlays] == ['roads-overlay', 'rivers-overlay', 'villages-overlay']
        assert [o.opacity for o in overlays] == [0.7, 0.6, 0.5]
        assert all(o.visible for o in overlays)
        assert overlays[0].to_dict()['data'] == {'type': 'FeatureCollection', 'features': []}

    def test_toggle_visibility_touches_only_target(self):
        overlays = SpatialAnalysisService.default_overlays()
        updated = SpatialAnalysisService.set_overlay_visibility(overlays, 'rivers-overlay', False)
        assert [o.visible for o in updated] == [True, False, True]
        # Original list untouched
        assert all(o.visible for o in overlays)

    def test_set_opacity(self):
        overlays = SpatialAnalysisService.default_overlays()
        updated = SpatialAnalysisService.set_overlay_opacity(overlays, 'roads-overlay', 0.25)
        assert updated[0].opacity == 0.25
        assert updated[1].opacity == 0.6

    @pytest.mark.parametrize('opacity', [-0.1, 1.5])
    def test_opacity_out_of_range(self, opacity):
        overlays = SpatialAnalysisService.default_overlays()
        with pytest.raises(ValueError):
            SpatialAnalysisService.set_overlay_opacity(overlays, 'roads-overlay', opacity)

    def test_unknown_overlay(self):
        overlays = SpatialAnalysisService.default_overlays()
        with pytest.raises(KeyError):
            SpatialAnalysisService.set_overlay_visibility(overlays, 'lakes-overlay', False)


# ============================================================================
# ROUTE POLYLINE
# ============================================================================

class TestGenerateRoute:

    def test_keeps_caller_order(self):
        points = [
            {'lat': -8.84, 'lng': 116.29, 'name': 'Sade'},
            {'lat': -8.58, 'lng': 116.10, 'name': 'Meru'},
            {'lat': -8.83, 'lng': 116.28, 'name': 'Rembitan'},
        ]
        assert SpatialAnalysisService.generate_route(points) == [
            [-8.84, 116.29], [-8.58, 116.10], [-8.83, 116.28]
        ]

    def test_empty(self):
        assert SpatialAnalysisService.generate_route([]) == []

    def test_missing_coordinate_raises(self):
        with pytest.raises(KeyError):
            SpatialAnalysisService.generate_route([{'lat': -8.5}])


# ============================================================================
# STATISTICS AND EXPORT
# ============================================================================

class TestSpatialStats:

    def test_empty(self):
        stats = SpatialAnalysisService.calculate_spatial_stats([])
        assert stats['total_sites'] == 0
        assert stats['centroid'] is None
        assert stats['clusters'] == []

    def test_centroid_and_cluster(self, make_site):
        a = make_site(latitude=-8.5850, longitude=116.1010)
        b = make_site(latitude=-8.5846, longitude=116.0993)
        far = make_site(latitude=-8.8390, longitude=116.2920)

        stats = SpatialAnalysisService.calculate_spatial_stats([a, b, far])

        assert stats['total_sites'] == 3
        assert stats['centroid'][0] == pytest.approx((-8.5850 - 8.5846 - 8.8390) / 3)
        assert stats['average_distance'] > 0
        assert stats['density'] > 0
        assert len(stats['clusters']) == 1
        cluster = stats['clusters'][0]
        assert cluster['id'] == 'cluster-0'
        assert cluster['site_ids'] == [a.id, b.id]
        assert cluster['site_count'] == 2

    def test_single_site_has_zero_density(self, make_site):
        stats = SpatialAnalysisService.calculate_spatial_stats([make_site()])
        assert stats['average_distance'] == 0
        assert stats['density'] == 0


class TestExportGeojson:

    def test_positions_are_lng_lat(self, make_site):
        site = make_site(name='Desa Sade', latitude=-8.839, longitude=116.292,
                         category_name='Desa Adat', preservation_status='good')
        collection = SpatialAnalysisService.export_as_geojson([site])

        assert collection['type'] == 'FeatureCollection'
        feature = collection['features'][0]
        assert feature['geometry'] == {'type': 'Point', 'coordinates': [116.292, -8.839]}
        assert feature['properties']['name'] == 'Desa Sade'
        assert feature['properties']['category'] == 'Desa Adat'
        assert feature['properties']['preservationStatus'] == 'good'
