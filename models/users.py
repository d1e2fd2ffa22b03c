import uuid
from models import db
from werkzeug.security import generate_password_hash, check_password_hash

ROLES = ("teacher", "student")


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    uid = db.Column(db.String(36), nullable=False, unique=True, default=lambda: str(uuid.uuid4()))
    username = db.Column(db.String(50), nullable=False, unique=True)
    email = db.Column(db.String(100), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(20), nullable=False)  # 'teacher', 'student'
    date_created = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    def set_password(self, password):
        """Hashes the password before storing."""
        self.password_hash = generate_password_hash(password, method="pbkdf2:sha256")

    def check_password(self, password):
        """Checks if a given password matches the stored hash."""
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"

    def to_dict(self):
        return {
            "uid": self.uid,
            "username": self.username,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "date_created": self.date_created.isoformat() if self.date_created else None,
            }
