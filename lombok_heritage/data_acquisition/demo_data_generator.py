"""
Demo Data Generator for the Lombok Heritage Catalogue
Real heritage sites of Lombok with plausible assessment scores, plus
generated creation dates and visitor reviews for the dashboard charts.
"""
import random
from datetime import datetime, timedelta

import numpy as np

from lombok_heritage import db
from lombok_heritage.models import (
    HeritageCategory, CulturalSite, TourismRoute, RouteSite, SiteReview
)


class LombokDemoDataGenerator:
    """Populate an empty database with a small demo catalogue"""

    CATEGORIES = [
        # name, color, description
        ('Pura', '#f59e0b', 'Hindu temples of the Balinese community'),
        ('Masjid Kuno', '#22c55e', 'Historic mosques of the Wetu Telu tradition'),
        ('Desa Adat', '#8b5cf6', 'Traditional Sasak villages'),
        ('Taman Kerajaan', '#3b82f6', 'Royal water gardens of the Karangasem era'),
        ('Makam Keramat', '#6b7280', 'Sacred tombs and pilgrimage sites'),
        ('Desa Kerajinan', '#ec4899', 'Craft villages (pottery, weaving)'),
        ('Situs Arkeologi', '#14b8a6', 'Archaeological sites'),
    ]

    # name, local name, category, lat, lng, regency, status, significance, popularity, established
    SITES = [
        ('Pura Meru', 'Pura Meru Cakranegara', 'Pura', -8.5850, 116.1010,
         'Kota Mataram', 'good', 8.5, 7.0, 1720),
        ('Taman Mayura', 'Taman Mayura', 'Taman Kerajaan', -8.5846, 116.0993,
         'Kota Mataram', 'fair', 8.0, 6.5, 1744),
        ('Pura Lingsar', 'Pura Lingsar', 'Pura', -8.5790, 116.1640,
         'Lombok Barat', 'good', 9.0, 7.5, 1714),
        ('Taman Narmada', 'Taman Narmada', 'Taman Kerajaan', -8.5930, 116.2050,
         'Lombok Barat', 'restored', 8.5, 8.5, 1727),
        ('Pura Suranadi', 'Pura Suranadi', 'Pura', -8.5630, 116.2410,
         'Lombok Barat', 'fair', 7.5, 5.0, 1720),
        ('Pura Batu Bolong', 'Pura Batu Bolong', 'Pura', -8.5010, 116.0440,
         'Lombok Barat', 'poor', 7.0, 8.0, 1500),
        ('Makam Loang Baloq', 'Makam Loang Baloq', 'Makam Keramat', -8.6130, 116.0740,
         'Kota Mataram', 'fair', 6.5, 6.0, 1550),
        ('Masjid Kuno Bayan Beleq', 'Masjid Bayan Beleq', 'Masjid Kuno', -8.2730, 116.4250,
         'Lombok Utara', 'critical', 9.5, 6.0, 1634),
        ('Desa Segenter', 'Dusun Segenter', 'Desa Adat', -8.2560, 116.3800,
         'Lombok Utara', 'poor', 7.0, 3.0, None),
        ('Desa Sade', 'Dusun Sade', 'Desa Adat', -8.8390, 116.2920,
         'Lombok Tengah', 'good', 8.0, 9.5, 1500),
        ('Desa Ende', 'Dusun Ende', 'Desa Adat', -8.8500, 116.2800,
         'Lombok Tengah', 'under_restoration', 6.5, 6.0, None),
        ('Masjid Kuno Rembitan', 'Masjid Rembitan', 'Masjid Kuno', -8.8350, 116.2860,
         'Lombok Tengah', 'critical', 9.0, 5.5, 1650),
        ('Desa Banyumulek', 'Banyumulek', 'Desa Kerajinan', -8.6540, 116.1100,
         'Lombok Barat', 'excellent', 5.0, 6.5, 1950),
        ('Islamic Center NTB', 'Masjid Hubbul Wathan', 'Masjid Kuno', -8.5830, 116.1050,
         'Kota Mataram', 'excellent', 4.0, 9.0, 2016),
    ]

    ROUTES = [
        {
            'name': 'Jejak Kerajaan Mataram',
            'description': 'Temples and royal gardens of the former Karangasem court',
            'route_type': 'driving',
            'difficulty_level': 'easy',
            'duration_hours': 7,
            'stops': [('Pura Meru', 60), ('Taman Mayura', 45), ('Makam Loang Baloq', 30),
                      ('Taman Narmada', 90), ('Pura Lingsar', None)],
        },
        {
            'name': 'Desa Adat Lombok Tengah',
            'description': 'Sasak villages and the Rembitan mosque near Kuta',
            'route_type': 'driving',
            'difficulty_level': 'easy',
            'duration_hours': 4,
            'stops': [('Desa Sade', 90), ('Masjid Kuno Rembitan', 30), ('Desa Ende', 60)],
        },
        {
            'name': 'Wetu Telu Bayan',
            'description': 'Northern Lombok along the coast road to Bayan',
            'route_type': 'driving',
            'difficulty_level': 'moderate',
            'duration_hours': 6,
            'stops': [('Masjid Kuno Bayan Beleq', 60), ('Desa Segenter', 120)],
            # Hand-drawn path following the coast road
            'route_coordinates': {
                'type': 'LineString',
                'coordinates': [[116.4250, -8.2730], [116.4105, -8.2655],
                                [116.3950, -8.2610], [116.3800, -8.2560]]
            },
        },
    ]

    REVIEWERS = ['Baiq Nurul', 'Lalu Ahmad', 'Komang Ari', 'Putu Wirawan',
                 'Sarah M.', 'Hendra S.', 'Ni Made Sri', 'Jonas K.']

    def __init__(self, seed=42, now=None):
        """
        Args:
            seed: Random seed for reproducibility
            now: Reference time for generated timestamps (default: utcnow)
        """
        self.seed = seed
        self.now = now or datetime.utcnow()
        self.rng = np.random.RandomState(seed)
        self.random = random.Random(seed)

    def _created_within(self, days):
        return self.now - timedelta(days=int(self.rng.randint(0, days)),
                                    minutes=int(self.rng.randint(0, 24 * 60)))

    def generate(self):
        """Insert categories, sites, routes and reviews; returns counts"""
        categories = {}
        for name, color, description in self.CATEGORIES:
            category = HeritageCategory(name=name, color_hex=color, description=description)
            db.session.add(category)
            categories[name] = category
        db.session.flush()

        sites = {}
        for (name, local_name, category, lat, lng, regency, status,
             significance, popularity, established) in self.SITES:
            created_at = self._created_within(365)
            site = CulturalSite(
                name=name,
                local_name=local_name,
                category_id=categories[category].id,
                latitude=lat,
                longitude=lng,
                regency=regency,
                preservation_status=status,
                cultural_significance_score=significance,
                tourism_popularity_score=popularity,
                established_year=established,
                is_unesco_site=False,
                is_active=True,
                verified_at=created_at + timedelta(days=7) if self.rng.random_sample() < 0.7 else None,
                created_at=created_at
            )
            db.session.add(site)
            sites[name] = site
        db.session.flush()

        for route_def in self.ROUTES:
            route = TourismRoute(
                name=route_def['name'],
                description=route_def['description'],
                route_type=route_def['route_type'],
                difficulty_level=route_def['difficulty_level'],
                duration_hours=route_def['duration_hours'],
                route_coordinates=route_def.get('route_coordinates'),
                is_active=True,
                created_at=self._created_within(180)
            )
            for order, (site_name, minutes) in enumerate(route_def['stops'], start=1):
                route.route_sites.append(RouteSite(
                    site_id=sites[site_name].id,
                    sequence_order=order,
                    visit_duration_minutes=minutes
                ))
            db.session.add(route)

        review_count = 0
        for site in sites.values():
            # Popular sites collect more reviews
            n_reviews = int(self.rng.poisson((site.tourism_popularity_score or 5) / 2))
            for _ in range(n_reviews):
                rating = int(np.clip(round(self.rng.normal(4.2, 0.8)), 1, 5))
                db.session.add(SiteReview(
                    site_id=site.id,
                    reviewer_name=self.random.choice(self.REVIEWERS),
                    rating=rating,
                    is_verified=bool(self.rng.random_sample() < 0.6),
                    created_at=self._created_within(365)
                ))
                review_count += 1

        db.session.commit()

        return {
            'categories': len(categories),
            'sites': len(sites),
            'routes': len(self.ROUTES),
            'reviews': review_count
        }
