"""
Cultural Site Model - Heritage site location and assessment attributes
"""
from lombok_heritage import db
from datetime import datetime

PRESERVATION_STATUSES = (
    'excellent', 'good', 'fair', 'poor', 'critical', 'restored', 'under_restoration'
)


class CulturalSite(db.Model):
    """Cultural heritage site on Lombok island"""

    __tablename__ = 'cultural_sites'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    local_name = db.Column(db.String(200))  # Sasak / Balinese name
    description = db.Column(db.Text)
    category_id = db.Column(db.Integer, db.ForeignKey('heritage_categories.id'), index=True)

    # Location details
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    address = db.Column(db.Text)
    regency = db.Column(db.String(100))  # Lombok Barat, Lombok Tengah, ...

    # Assessment
    preservation_status = db.Column(db.String(30))  # see PRESERVATION_STATUSES
    cultural_significance_score = db.Column(db.Float)  # 0-10
    tourism_popularity_score = db.Column(db.Float)  # 0-10
    established_year = db.Column(db.Integer)
    is_unesco_site = db.Column(db.Boolean, default=False)

    # Metadata
    is_active = db.Column(db.Boolean, default=True)
    verified_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    reviews = db.relationship('SiteReview', backref='site', lazy='dynamic')

    def __repr__(self):
        return f'<CulturalSite {self.id}: {self.name}>'

    def to_dict(self):
        """Convert site to dictionary"""
        return {
            'id': self.id,
            'name': self.name,
            'local_name': self.local_name,
            'category_id': self.category_id,
            'category_name': self.category.name if self.category else None,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'regency': self.regency,
            'preservation_status': self.preservation_status,
            'cultural_significance_score': self.cultural_significance_score,
            'tourism_popularity_score': self.tourism_popularity_score,
            'established_year': self.established_year,
            'is_unesco_site': self.is_unesco_site,
            'is_active': self.is_active
        }
