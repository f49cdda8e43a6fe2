"""
Tourism Route Models - Curated routes and their ordered site stops
"""
from lombok_heritage import db
from datetime import datetime

class TourismRoute(db.Model):
    """Tourism route through several cultural sites"""

    __tablename__ = 'tourism_routes'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    route_type = db.Column(db.String(50))  # walking, cycling, driving
    difficulty_level = db.Column(db.String(20))  # easy, moderate, hard
    duration_hours = db.Column(db.Float)
    estimated_cost = db.Column(db.Float)  # IDR
    recommended_season = db.Column(db.String(50))

    # Optional hand-drawn path, GeoJSON LineString ([lng, lat] positions)
    route_coordinates = db.Column(db.JSON)

    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    route_sites = db.relationship('RouteSite', backref='route', lazy='select',
                                  order_by='RouteSite.sequence_order',
                                  cascade='all, delete-orphan')

    def __repr__(self):
        return f'<TourismRoute {self.id}: {self.name}>'

    def to_dict(self):
        """Convert route to dictionary"""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'route_type': self.route_type,
            'difficulty_level': self.difficulty_level,
            'duration_hours': self.duration_hours,
            'estimated_cost': self.estimated_cost,
            'recommended_season': self.recommended_season,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }


class RouteSite(db.Model):
    """Stop of a tourism route (waypoint)"""

    __tablename__ = 'route_sites'
    __table_args__ = (
        db.UniqueConstraint('route_id', 'sequence_order', name='uq_route_sequence'),
    )

    id = db.Column(db.Integer, primary_key=True)
    route_id = db.Column(db.Integer, db.ForeignKey('tourism_routes.id'), nullable=False, index=True)
    site_id = db.Column(db.Integer, db.ForeignKey('cultural_sites.id'), nullable=False)
    sequence_order = db.Column(db.Integer, nullable=False)
    visit_duration_minutes = db.Column(db.Integer, default=60)

    site = db.relationship('CulturalSite')

    def __repr__(self):
        return f'<RouteSite route={self.route_id} #{self.sequence_order} site={self.site_id}>'
