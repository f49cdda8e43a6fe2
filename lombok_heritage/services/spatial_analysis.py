"""
Spatial Analysis Service
Buffer zones, map overlays, proximity search and simple spatial statistics
for the public map view.
"""
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from lombok_heritage.services.geo_math import distance_m
from lombok_heritage.services.snapshot import SiteRecord

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_RADIUS_M = 500
CLUSTER_DISTANCE_M = 2000

# Used when a site has no category colour; cycled by selection position
BUFFER_PALETTE = (
    '#3b82f6', '#ef4444', '#22c55e', '#f59e0b',
    '#8b5cf6', '#ec4899', '#14b8a6', '#f97316',
)


@dataclass(frozen=True)
class BufferZone:
    site_id: int
    site_name: str
    center: Tuple[float, float]  # (lat, lng)
    radius: float  # meters
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'site_id': self.site_id,
            'site_name': self.site_name,
            'center': list(self.center),
            'radius': self.radius,
            'color': self.color,
        }


@dataclass(frozen=True)
class SpatialOverlay:
    """Display layer toggle; geometry is a placeholder FeatureCollection"""
    id: str
    name: str
    type: str  # roads, rivers, villages
    visible: bool = True
    opacity: float = 1.0
    data: Dict[str, Any] = field(
        default_factory=lambda: {'type': 'FeatureCollection', 'features': []}
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'visible': self.visible,
            'opacity': self.opacity,
            'data': self.data,
        }


class SpatialAnalysisService:
    """Stateless spatial helpers over a site snapshot"""

    # ========================================================================
    # BUFFER ZONES
    # ========================================================================

    @staticmethod
    def create_buffer_zones(sites: Sequence[SiteRecord],
                            radius_m: float = DEFAULT_BUFFER_RADIUS_M) -> List[BufferZone]:
        """
        One circular zone per selected site.

        The zone list always has the same length as the selection; the same
        site selected twice yields two zones.
        """
        zones = []
        for index, site in enumerate(sites):
            color = site.category_color or BUFFER_PALETTE[index % len(BUFFER_PALETTE)]
            zones.append(BufferZone(
                site_id=site.id,
                site_name=site.name or 'Unknown Site',
                center=(site.latitude, site.longitude),
                radius=radius_m,
                color=color,
            ))
        return zones

    @staticmethod
    def find_sites_in_buffer(center: Tuple[float, float], sites: Iterable[SiteRecord],
                             radius_m: float) -> List[SiteRecord]:
        """Sites whose distance to center is within radius_m (inclusive)"""
        return [site for site in sites if distance_m(center, site.point) <= radius_m]

    # ========================================================================
    # OVERLAYS
    # ========================================================================

    @staticmethod
    def default_overlays() -> List[SpatialOverlay]:
        """Roads, rivers and village layers shown on the spatial panel"""
        return [
            SpatialOverlay(id='roads-overlay', name='Jalan Raya', type='roads', opacity=0.7),
            SpatialOverlay(id='rivers-overlay', name='Sungai', type='rivers', opacity=0.6),
            SpatialOverlay(id='villages-overlay', name='Desa/Kelurahan', type='villages', opacity=0.5),
        ]

    @staticmethod
    def set_overlay_visibility(overlays: Sequence[SpatialOverlay], overlay_id: str,
                               visible: bool) -> List[SpatialOverlay]:
        SpatialAnalysisService._require_overlay(overlays, overlay_id)
        return [replace(o, visible=visible) if o.id == overlay_id else o for o in overlays]

    @staticmethod
    def set_overlay_opacity(overlays: Sequence[SpatialOverlay], overlay_id: str,
                            opacity: float) -> List[SpatialOverlay]:
        if not 0 <= opacity <= 1:
            raise ValueError(f'Opacity must be between 0 and 1, got {opacity}')
        SpatialAnalysisService._require_overlay(overlays, overlay_id)
        return [replace(o, opacity=opacity) if o.id == overlay_id else o for o in overlays]

    @staticmethod
    def _require_overlay(overlays: Sequence[SpatialOverlay], overlay_id: str) -> None:
        if not any(o.id == overlay_id for o in overlays):
            raise KeyError(overlay_id)

    # ========================================================================
    # ROUTES
    # ========================================================================

    @staticmethod
    def generate_route(points: Sequence[Dict[str, Any]]) -> List[List[float]]:
        """
        Polyline through points in the order given, as [lat, lng] pairs.

        Visit order is chosen by the user ("add to route"); no reordering
        happens here.
        """
        return [[float(p['lat']), float(p['lng'])] for p in points]

    # ========================================================================
    # STATISTICS
    # ========================================================================

    @staticmethod
    def calculate_spatial_stats(sites: Sequence[SiteRecord]) -> Dict[str, Any]:
        """Centroid, mean spread, rough density and 2 km clusters"""
        if not sites:
            return {
                'total_sites': 0,
                'centroid': None,
                'average_distance': 0,
                'density': 0,
                'clusters': []
            }

        centroid = (
            sum(s.latitude for s in sites) / len(sites),
            sum(s.longitude for s in sites) / len(sites),
        )
        distances = [distance_m(centroid, s.point) for s in sites]
        average_distance = sum(distances) / len(distances)

        # Sites per km² of the circle with the mean spread as radius
        area_km2 = math.pi * (average_distance / 1000) ** 2
        density = len(sites) / area_km2 if area_km2 > 0 else 0

        clusters = SpatialAnalysisService.identify_clusters(sites)
        logger.debug("Spatial stats: %d sites, %d clusters", len(sites), len(clusters))

        return {
            'total_sites': len(sites),
            'centroid': list(centroid),
            'average_distance': round(average_distance, 2),
            'density': round(density, 4),
            'clusters': clusters
        }

    @staticmethod
    def identify_clusters(sites: Sequence[SiteRecord],
                          max_distance_m: float = CLUSTER_DISTANCE_M) -> List[Dict[str, Any]]:
        """
        Greedy grouping: each unprocessed site seeds a cluster and absorbs
        every unprocessed site within max_distance_m of the seed.
        Single-site groups are not reported.
        """
        processed = set()
        groups = []

        for index, site in enumerate(sites):
            if index in processed:
                continue
            group = [site]
            processed.add(index)

            for other_index, other in enumerate(sites):
                if other_index in processed:
                    continue
                if distance_m(site.point, other.point) <= max_distance_m:
                    group.append(other)
                    processed.add(other_index)

            if len(group) > 1:
                groups.append(group)

        clusters = []
        for i, group in enumerate(groups):
            center = (
                sum(s.latitude for s in group) / len(group),
                sum(s.longitude for s in group) / len(group),
            )
            clusters.append({
                'id': f'cluster-{i}',
                'site_ids': [s.id for s in group],
                'center': list(center),
                'site_count': len(group)
            })
        return clusters

    # ========================================================================
    # EXPORT
    # ========================================================================

    @staticmethod
    def export_as_geojson(sites: Iterable[SiteRecord]) -> Dict[str, Any]:
        """FeatureCollection of site points ([lng, lat] positions)"""
        return {
            'type': 'FeatureCollection',
            'features': [{
                'type': 'Feature',
                'geometry': {
                    'type': 'Point',
                    'coordinates': [site.longitude, site.latitude]
                },
                'properties': {
                    'id': site.id,
                    'name': site.name,
                    'localName': site.local_name,
                    'category': site.category_name,
                    'significance': site.cultural_significance_score,
                    'preservationStatus': site.preservation_status
                }
            } for site in sites]
        }
