from florisifrunze import db

class AdminRegisterSetting(db.Model):
    """Single-row flag that opens or closes admin self registration."""
    __tablename__ = 'admin_register'
    id = db.Column(db.Integer, primary_key=True)
    adminregister = db.Column(db.Boolean, nullable=False, default=False)
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(), onupdate=db.func.current_timestamp())
