from app.extensions import db
from app.models.timestamps import local_now
from werkzeug.security import generate_password_hash, check_password_hash

ROLES = ("student", "instructor", "department_admin", "super_admin")


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(150), unique=True, nullable=False)
    password = db.Column(db.String(255))
    role = db.Column(db.String(50), nullable=False)

    student_id = db.Column(db.String(50), nullable=True)
    employee_id = db.Column(db.String(50), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Membership for students/instructors, administered department for admins
    department_id = db.Column(db.Integer, db.ForeignKey("department.id"), nullable=True)
    department = db.relationship("Department", back_populates="members")

    created_at = db.Column(db.DateTime(timezone=True), default=local_now)

    def set_password(self, raw_password):
        self.password = generate_password_hash(raw_password)

    def check_password(self, raw_password):
        if not self.password:
            return False
        return check_password_hash(self.password, raw_password)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "student_id": self.student_id,
            "employee_id": self.employee_id,
            "is_active": self.is_active,
            "department_id": self.department_id,
            "department": self.department.name if self.department else None,
        }
