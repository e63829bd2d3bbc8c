from florisifrunze import db
from florisifrunze.models import isoformat

class Subscription(db.Model):
    __tablename__ = 'subscriptions'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, default='')
    color = db.Column(db.String(7), default='#FFFFFF')
    price = db.Column(db.String(100), nullable=False)
    features = db.Column(db.JSON, default=list)  # [{name, value}]
    is_popular = db.Column(db.Boolean, default=False)
    display_order = db.Column(db.Integer, default=0)
    image_url = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(), onupdate=db.func.current_timestamp())

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description or '',
            'color': self.color or '#FFFFFF',
            'price': self.price,
            'features': self.features or [],
            'isPopular': bool(self.is_popular),
            'displayOrder': self.display_order or 0,
            'imageUrl': self.image_url,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
