"""
Site Review Model - Visitor ratings of cultural sites
"""
from lombok_heritage import db
from datetime import datetime

class SiteReview(db.Model):
    """Visitor review, moderated through is_verified"""

    __tablename__ = 'site_reviews'

    id = db.Column(db.Integer, primary_key=True)
    site_id = db.Column(db.Integer, db.ForeignKey('cultural_sites.id'), nullable=False, index=True)
    reviewer_name = db.Column(db.String(120))
    rating = db.Column(db.Integer, nullable=False)  # 1-5
    comment = db.Column(db.Text)
    is_verified = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<SiteReview {self.id} site={self.site_id} rating={self.rating}>'

    def to_dict(self):
        """Convert review to dictionary"""
        return {
            'id': self.id,
            'site_id': self.site_id,
            'site_name': self.site.name if self.site else None,
            'reviewer_name': self.reviewer_name,
            'rating': self.rating,
            'comment': self.comment,
            'is_verified': self.is_verified,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
