from florisifrunze import db
from florisifrunze.models import isoformat

class CarouselImage(db.Model):
    __tablename__ = 'carousel_images'
    id = db.Column(db.Integer, primary_key=True)
    image_url = db.Column(db.Text, nullable=False)
    alt_text = db.Column(db.String(255), default='')
    display_order = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(), onupdate=db.func.current_timestamp())

    def to_dict(self):
        return {
            'id': self.id,
            'imageUrl': self.image_url,
            'altText': self.alt_text or '',
            'displayOrder': self.display_order or 0,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
