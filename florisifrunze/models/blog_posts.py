from florisifrunze import db
from florisifrunze.models import isoformat

class BlogPost(db.Model):
    __tablename__ = 'blog_posts'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    excerpt = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.Text)
    sections = db.Column(db.JSON, default=list)  # text, image, quote, heading, list
    tags = db.Column(db.JSON, default=list)
    published_at = db.Column(db.DateTime, nullable=False, default=db.func.current_timestamp())
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(), onupdate=db.func.current_timestamp())

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'excerpt': self.excerpt,
            'imageUrl': self.image_url,
            'sections': self.sections or [],
            'tags': self.tags or [],
            'publishedAt': isoformat(self.published_at),
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
