"""
Recommendation Service
Preservation priority scoring for cultural sites.

Each site receives five component scores on a 0-10 scale which are combined
with fixed weights into a priority score. The score selects a tier
(critical/high/medium/low) that drives the recommended actions.
"""
import csv
import io
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from lombok_heritage.services.snapshot import SiteRecord

logger = logging.getLogger(__name__)

# Defaults for missing site attributes
UNKNOWN_SCORE = 5
UNESCO_SCORE = 10
NON_UNESCO_SCORE = 0

TIERS = ('critical', 'high', 'medium', 'low')

# Weights sum to 1.0
WEIGHTS = {
    'preservation_status': 0.40,
    'historical_significance': 0.25,
    'tourism_popularity': 0.20,
    'site_age': 0.10,
    'unesco_status': 0.05,
}

PRESERVATION_STATUS_SCORES = {
    'critical': 10,
    'poor': 9,
    'fair': 6,
    'under_restoration': 4,
    'good': 3,
    'restored': 2,
    'excellent': 1,
}

# (minimum age in years, score), checked top to bottom
AGE_BRACKETS = (
    (500, 10),
    (200, 8),
    (100, 6),
    (50, 4),
)
YOUNG_SITE_SCORE = 2

# (minimum total score, tier), checked top to bottom
TIER_THRESHOLDS = (
    (8, 'critical'),
    (6, 'high'),
    (4, 'medium'),
)

# Reasons in reporting order: (component, minimum sub-score, text)
REASON_RULES = (
    ('preservation_status', 8, 'Critical or poor preservation status requires immediate attention'),
    ('historical_significance', 7, 'High historical significance demands preservation priority'),
    ('tourism_popularity', 7, 'High tourism popularity increases urgency for preservation'),
    ('site_age', 7, 'Ancient site requires special preservation measures'),
    ('unesco_status', 5, 'UNESCO World Heritage status requires international standards'),
)
DEFAULT_REASON = 'Standard preservation monitoring recommended'

TIER_ACTIONS = {
    'critical': (
        'Immediate conservation assessment required',
        'Emergency stabilization measures needed',
        'UNESCO expert consultation recommended',
        'Public access restrictions may be necessary',
    ),
    'high': (
        'Detailed condition survey within 3 months',
        'Conservation planning and budgeting',
        'Community engagement for preservation efforts',
        'Regular monitoring schedule implementation',
    ),
    'medium': (
        'Annual condition assessment',
        'Preventive maintenance planning',
        'Documentation and monitoring improvements',
        'Community awareness programs',
    ),
    'low': (
        'Regular monitoring and documentation',
        'Preventive maintenance as needed',
        'Educational programs for local community',
    ),
}

CSV_HEADERS = (
    'Site Name',
    'Priority Level',
    'Priority Score',
    'Preservation Status Score',
    'Historical Significance Score',
    'Tourism Popularity Score',
    'Site Age Score',
    'UNESCO Status Score',
    'Reasons',
    'Recommended Actions',
)


@dataclass(frozen=True)
class PreservationPriority:
    site_id: int
    site_name: str
    priority_score: float
    priority_level: str
    reasons: tuple
    recommended_actions: tuple
    scores: Dict[str, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'site_id': self.site_id,
            'site_name': self.site_name,
            'priority_score': round(self.priority_score, 2),
            'priority_level': self.priority_level,
            'reasons': list(self.reasons),
            'recommended_actions': list(self.recommended_actions),
            'scores': dict(self.scores),
        }


class RecommendationService:
    """Weighted multi-factor preservation priority scoring"""

    def __init__(self, reference_year: Optional[int] = None):
        """
        Args:
            reference_year: Year used to compute site age (default: current UTC year)
        """
        self.reference_year = reference_year or datetime.utcnow().year

    # ========================================================================
    # COMPONENT SCORES
    # ========================================================================

    @staticmethod
    def score_preservation_status(status: Optional[str]) -> float:
        return PRESERVATION_STATUS_SCORES.get(status, UNKNOWN_SCORE)

    @staticmethod
    def score_historical_significance(score: Optional[float]) -> float:
        # Inverted: the more significant the site, the lower this component
        if score is None:
            return UNKNOWN_SCORE
        return max(0, 10 - score)

    @staticmethod
    def score_tourism_popularity(score: Optional[float]) -> float:
        if score is None:
            return UNKNOWN_SCORE
        return score

    def score_site_age(self, established_year: Optional[int]) -> float:
        if established_year is None:
            return UNKNOWN_SCORE

        age = self.reference_year - established_year
        for min_age, score in AGE_BRACKETS:
            if age >= min_age:
                return score
        return YOUNG_SITE_SCORE

    @staticmethod
    def score_unesco_status(is_unesco: Optional[bool]) -> float:
        return UNESCO_SCORE if is_unesco else NON_UNESCO_SCORE

    # ========================================================================
    # PRIORITY
    # ========================================================================

    @staticmethod
    def weighted_total(scores: Dict[str, float]) -> float:
        total = math.fsum(scores[key] * weight for key, weight in WEIGHTS.items())
        # Drop float noise so that e.g. 8.0 does not land on 7.999999999
        return round(total, 9)

    @staticmethod
    def determine_priority_level(score: float) -> str:
        for threshold, tier in TIER_THRESHOLDS:
            if score >= threshold:
                return tier
        return 'low'

    @staticmethod
    def generate_reasons(scores: Dict[str, float]) -> List[str]:
        reasons = [text for key, minimum, text in REASON_RULES if scores[key] >= minimum]
        return reasons or [DEFAULT_REASON]

    @staticmethod
    def generate_recommended_actions(priority_level: str) -> List[str]:
        return list(TIER_ACTIONS[priority_level])

    def calculate_site_priority(self, site: SiteRecord) -> PreservationPriority:
        """Calculate preservation priority for a single site"""
        scores = {
            'preservation_status': self.score_preservation_status(site.preservation_status),
            'historical_significance': self.score_historical_significance(site.cultural_significance_score),
            'tourism_popularity': self.score_tourism_popularity(site.tourism_popularity_score),
            'site_age': self.score_site_age(site.established_year),
            'unesco_status': self.score_unesco_status(site.is_unesco_site),
        }

        priority_score = self.weighted_total(scores)
        priority_level = self.determine_priority_level(priority_score)

        return PreservationPriority(
            site_id=site.id,
            site_name=site.name or 'Unknown Site',
            priority_score=priority_score,
            priority_level=priority_level,
            reasons=tuple(self.generate_reasons(scores)),
            recommended_actions=tuple(self.generate_recommended_actions(priority_level)),
            scores=scores,
        )

    def calculate_all_priorities(self, sites: Iterable[SiteRecord]) -> List[PreservationPriority]:
        priorities = [self.calculate_site_priority(site) for site in sites]
        logger.debug("Scored %d sites", len(priorities))
        return priorities

    # ========================================================================
    # BATCH QUERIES
    # ========================================================================

    @staticmethod
    def _by_score(priorities: Iterable[PreservationPriority]) -> List[PreservationPriority]:
        # sorted() is stable, so equal scores keep snapshot order
        return sorted(priorities, key=lambda p: p.priority_score, reverse=True)

    @staticmethod
    def get_sites_by_priority(priorities: Sequence[PreservationPriority], priority_level: str,
                              limit: int = 20) -> List[PreservationPriority]:
        if priority_level not in TIERS:
            raise ValueError(f'Unknown priority level: {priority_level}')
        matching = [p for p in priorities if p.priority_level == priority_level]
        return RecommendationService._by_score(matching)[:limit]

    @staticmethod
    def get_top_priority_sites(priorities: Sequence[PreservationPriority],
                               limit: Optional[int] = 10) -> List[PreservationPriority]:
        return RecommendationService._by_score(priorities)[:limit]

    @staticmethod
    def get_recommendation_stats(priorities: Sequence[PreservationPriority]) -> Dict[str, Any]:
        """
        Tier counts and mean priority score.

        average_score is 0 when there are no sites.
        """
        total = len(priorities)
        counts = {tier: 0 for tier in TIERS}
        for p in priorities:
            counts[p.priority_level] += 1

        average = math.fsum(p.priority_score for p in priorities) / total if total > 0 else 0.0

        return {
            'total_sites': total,
            'critical_priority': counts['critical'],
            'high_priority': counts['high'],
            'medium_priority': counts['medium'],
            'low_priority': counts['low'],
            'average_score': round(average, 2)
        }

    # ========================================================================
    # EXPORT
    # ========================================================================

    @staticmethod
    def _format_number(value: float) -> str:
        value = float(value)
        if value.is_integer():
            return str(int(value))
        return str(round(value, 2))

    @staticmethod
    def export_recommendations_as_csv(priorities: Iterable[PreservationPriority]) -> str:
        """CSV text, header first, every field quoted"""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
        writer.writerow(CSV_HEADERS)

        fmt = RecommendationService._format_number
        for p in priorities:
            writer.writerow([
                p.site_name,
                p.priority_level,
                f'{p.priority_score:.2f}',
                fmt(p.scores['preservation_status']),
                fmt(p.scores['historical_significance']),
                fmt(p.scores['tourism_popularity']),
                fmt(p.scores['site_age']),
                fmt(p.scores['unesco_status']),
                '; '.join(p.reasons),
                '; '.join(p.recommended_actions),
            ])

        return buffer.getvalue().rstrip('\n')
