from florisifrunze import db
from florisifrunze.models import isoformat

class Service(db.Model):
    __tablename__ = 'services'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=False)
    short_desc = db.Column(db.String(255), nullable=False)
    price = db.Column(db.String(100), nullable=False)  # Display string, e.g. "De la 120 RON/luna"
    image_url = db.Column(db.Text)
    is_featured = db.Column(db.Boolean, default=False)

    duration = db.Column(db.String(100))
    coverage = db.Column(db.String(100))
    benefits = db.Column(db.JSON, default=list)
    includes = db.Column(db.JSON, default=list)
    faqs = db.Column(db.JSON, default=list)  # [{question, answer}]
    recommended_frequency = db.Column(db.String(100))
    seasonal_availability = db.Column(db.JSON, default=list)
    gallery_images = db.Column(db.JSON, default=list)

    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(), onupdate=db.func.current_timestamp())

    # Relationships by class name
    appointments = db.relationship('Appointment', backref='service', lazy=True)
    inquiries = db.relationship('Inquiry', backref='service', lazy=True)
    portfolio_items = db.relationship('PortfolioItem', backref='service', lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'shortDesc': self.short_desc,
            'price': self.price,
            'imageUrl': self.image_url,
            'featured': bool(self.is_featured),
            'duration': self.duration,
            'coverage': self.coverage,
            'benefits': self.benefits or [],
            'includes': self.includes or [],
            'faqs': self.faqs or [],
            'recommendedFrequency': self.recommended_frequency,
            'seasonalAvailability': self.seasonal_availability or [],
            'galleryImages': self.gallery_images or [],
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
