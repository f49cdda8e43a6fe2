"""
Dashboard Service
Chart series and summary statistics computed from a catalogue snapshot
"""
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from lombok_heritage.services.snapshot import (
    CategoryRecord, ReviewRecord, RouteRecord, SiteRecord
)

DEFAULT_CATEGORY_COLOR = '#8884d8'
UNCATEGORIZED = 'Uncategorized'

# Heatmap intensity model (all inputs on 0-10 scales)
HEATMAP_BASE_INTENSITY = 0.3
HEATMAP_SIGNIFICANCE_WEIGHT = 0.4
HEATMAP_POPULARITY_WEIGHT = 0.3
HEATMAP_UNESCO_BOOST = 0.2
HEATMAP_STATUS_MULTIPLIERS = {
    'excellent': 1.0,
    'good': 0.9,
    'fair': 0.8,
    'poor': 0.7,
    'critical': 0.6,
    'restored': 1.1,
    'under_restoration': 0.9,
}
HEATMAP_DEFAULT_MULTIPLIER = 0.8

PRESERVATION_STATUS_LABELS = {
    'excellent': 'Excellent',
    'good': 'Good',
    'fair': 'Fair',
    'poor': 'Poor',
    'critical': 'Critical',
    'restored': 'Restored',
    'under_restoration': 'Under Restoration',
    'unknown': 'Unknown'
}

PRESERVATION_STATUS_COLORS = {
    'excellent': '#22c55e',  # green
    'good': '#84cc16',  # light green
    'fair': '#eab308',  # yellow
    'poor': '#f97316',  # orange
    'critical': '#ef4444',  # red
    'restored': '#3b82f6',  # blue
    'under_restoration': '#8b5cf6',  # purple
    'unknown': '#6b7280'  # gray
}


def _as_utc_naive(value: datetime) -> datetime:
    """Timestamps without tzinfo are taken to be UTC already"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class DashboardService:
    """Aggregations for the admin dashboard charts"""

    # ========================================================================
    # CATEGORY DISTRIBUTION
    # ========================================================================

    @staticmethod
    def get_category_distribution(sites: Sequence[SiteRecord]) -> List[Dict[str, Any]]:
        """Active site count per category, largest first"""
        counts = Counter()
        colors = {}
        for site in sites:
            if not site.is_active:
                continue
            name = site.category_name or UNCATEGORIZED
            counts[name] += 1
            colors.setdefault(name, site.category_color or DEFAULT_CATEGORY_COLOR)

        ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [{
            'name': name,
            'count': count,
            'color': colors[name]
        } for name, count in ordered]

    # ========================================================================
    # TIME SERIES
    # ========================================================================

    @staticmethod
    def get_site_growth(sites: Sequence[SiteRecord], months: int = 12,
                        now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """
        Sites added per UTC calendar month over the trailing `months` months.

        The window ends with the month containing `now` and every month is
        present, zero-filled. `cumulative` is a running total over the window
        only; sites created before the window are not counted.
        """
        if months < 1:
            raise ValueError(f'months must be positive, got {months}')

        now = _as_utc_naive(now or datetime.utcnow())
        window = pd.period_range(end=pd.Period(now, freq='M'), periods=months, freq='M')

        created = [_as_utc_naive(s.created_at) for s in sites if s.created_at is not None]
        if created:
            periods = pd.DatetimeIndex(created).to_period('M')
            counts = pd.Series(periods).value_counts()
        else:
            counts = pd.Series(dtype='int64')

        monthly = counts.reindex(window, fill_value=0).astype('int64')
        cumulative = monthly.cumsum()

        return [{
            'date': str(period),
            'count': int(count),
            'cumulative': int(running)
        } for period, count, running in zip(window, monthly.tolist(), cumulative.tolist())]

    # ========================================================================
    # HEATMAP
    # ========================================================================

    @staticmethod
    def calculate_heatmap_intensity(site: SiteRecord) -> float:
        """
        Intensity in [0, 1]:
        (0.3 + 0.4*significance/10 + 0.3*popularity/10 + 0.2 if UNESCO)
        scaled by a preservation status multiplier and capped at 1.
        """
        intensity = HEATMAP_BASE_INTENSITY

        if site.cultural_significance_score:
            intensity += (site.cultural_significance_score / 10) * HEATMAP_SIGNIFICANCE_WEIGHT
        if site.tourism_popularity_score:
            intensity += (site.tourism_popularity_score / 10) * HEATMAP_POPULARITY_WEIGHT
        if site.is_unesco_site:
            intensity += HEATMAP_UNESCO_BOOST

        intensity *= HEATMAP_STATUS_MULTIPLIERS.get(site.preservation_status, HEATMAP_DEFAULT_MULTIPLIER)
        return max(0.0, min(intensity, 1.0))

    @staticmethod
    def get_heatmap_data(sites: Sequence[SiteRecord]) -> List[Dict[str, Any]]:
        return [{
            'lat': site.latitude,
            'lng': site.longitude,
            'intensity': round(DashboardService.calculate_heatmap_intensity(site), 4),
            'site_id': site.id,
            'site_name': site.name
        } for site in sites if site.is_active]

    # ========================================================================
    # PRESERVATION STATUS
    # ========================================================================

    @staticmethod
    def get_preservation_status_distribution(sites: Sequence[SiteRecord]) -> List[Dict[str, Any]]:
        active = [s for s in sites if s.is_active]
        total = len(active)
        if total == 0:
            return []

        counts = Counter(s.preservation_status or 'unknown' for s in active)
        return [{
            'status': status,
            'label': PRESERVATION_STATUS_LABELS.get(status, status),
            'count': count,
            'percentage': round(count / total * 100),
            'color': PRESERVATION_STATUS_COLORS.get(status, PRESERVATION_STATUS_COLORS['unknown'])
        } for status, count in counts.most_common()]

    # ========================================================================
    # SUMMARY
    # ========================================================================

    @staticmethod
    def get_dashboard_stats(sites: Sequence[SiteRecord], categories: Sequence[CategoryRecord],
                            reviews: Sequence[ReviewRecord],
                            routes: Sequence[RouteRecord]) -> Dict[str, Any]:
        """Calculate dashboard statistics"""
        used_category_ids = {s.category_id for s in sites if s.category_id is not None}
        categories_in_use = sum(1 for c in categories if c.id in used_category_ids)

        verified_reviews = [r for r in reviews if r.is_verified]
        if verified_reviews:
            average_rating = round(sum(r.rating for r in verified_reviews) / len(verified_reviews), 1)
        else:
            average_rating = 0

        return {
            'total_sites': len(sites),
            'active_sites': sum(1 for s in sites if s.is_active),
            'inactive_sites': sum(1 for s in sites if not s.is_active),
            'verified_sites': sum(1 for s in sites if s.verified_at is not None),
            'total_categories': len(categories),
            'categories_in_use': categories_in_use,
            'unused_categories': len(categories) - categories_in_use,
            'total_reviews': len(reviews),
            'verified_reviews': len(verified_reviews),
            'total_routes': len(routes),
            'active_routes': sum(1 for r in routes if r.is_active),
            'average_rating': average_rating
        }

    @staticmethod
    def get_recent_activities(sites: Sequence[SiteRecord], reviews: Sequence[ReviewRecord],
                              routes: Sequence[RouteRecord], limit: int = 10) -> Dict[str, Any]:
        """Latest sites, reviews and routes, newest first"""
        def newest(records):
            dated = [r for r in records if r.created_at is not None]
            return sorted(dated, key=lambda r: _as_utc_naive(r.created_at), reverse=True)[:limit]

        return {
            'recent_sites': [{
                'id': s.id,
                'name': s.name,
                'local_name': s.local_name,
                'category_name': s.category_name,
                'created_at': s.created_at.isoformat()
            } for s in newest(sites)],
            'recent_reviews': [{
                'id': r.id,
                'site_id': r.site_id,
                'site_name': r.site_name,
                'reviewer_name': r.reviewer_name,
                'rating': r.rating,
                'is_verified': r.is_verified,
                'created_at': r.created_at.isoformat()
            } for r in newest(reviews)],
            'recent_routes': [{
                'id': r.id,
                'name': r.name,
                'is_active': r.is_active,
                'created_at': r.created_at.isoformat()
            } for r in newest(routes)]
        }
