"""
Heritage Category Model - Classification of cultural sites
"""
from lombok_heritage import db
from datetime import datetime

class HeritageCategory(db.Model):
    """Category of cultural heritage (temple, mosque, traditional village, ...)"""

    __tablename__ = 'heritage_categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.Text)
    color_hex = db.Column(db.String(7))  # e.g. #3b82f6, used by maps and charts
    icon = db.Column(db.String(50))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    sites = db.relationship('CulturalSite', backref='category', lazy='dynamic')

    def __repr__(self):
        return f'<HeritageCategory {self.name}>'

    def to_dict(self):
        """Convert category to dictionary"""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'color_hex': self.color_hex,
            'icon': self.icon,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
