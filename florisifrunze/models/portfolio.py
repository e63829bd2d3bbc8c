from sqlalchemy import Enum
from florisifrunze import db
from florisifrunze.models import isoformat

PORTFOLIO_STATUSES = ('Published', 'Draft')
DIFFICULTY_LEVELS = ('Easy', 'Moderate', 'Complex')

class PortfolioItem(db.Model):
    __tablename__ = 'portfolio_items'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    service_id = db.Column(db.Integer, db.ForeignKey('services.id'), nullable=True)

    # Legacy single image, kept next to the before/after pairs
    image_url = db.Column(db.Text)
    images = db.Column(db.JSON, default=list)  # [{before, after, caption, richDescription, order}]

    location = db.Column(db.String(150))
    completion_date = db.Column(db.DateTime)
    project_duration = db.Column(db.String(100))
    difficulty_level = db.Column(Enum(*DIFFICULTY_LEVELS, name='difficulty_enum'))
    client_testimonial = db.Column(db.JSON)  # {clientName, comment, displayPermission}
    featured = db.Column(db.Boolean, default=False)
    seo = db.Column(db.JSON)  # {metaTitle, metaDescription, tags}
    status = db.Column(Enum(*PORTFOLIO_STATUSES, name='portfolio_status_enum'), default='Draft')
    view_count = db.Column(db.Integer, default=0)

    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(), onupdate=db.func.current_timestamp())

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'serviceId': self.service_id,
            'imageUrl': self.image_url,
            'images': sorted(self.images or [], key=lambda image: image.get('order', 0)),
            'location': self.location,
            'completionDate': isoformat(self.completion_date),
            'projectDuration': self.project_duration,
            'difficultyLevel': self.difficulty_level,
            'clientTestimonial': self.client_testimonial,
            'featured': bool(self.featured),
            'seo': self.seo or {'metaTitle': '', 'metaDescription': '', 'tags': []},
            'status': self.status or 'Draft',
            'viewCount': self.view_count or 0,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
