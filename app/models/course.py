from app.extensions import db

LEVELS = ("beginner", "intermediate", "advanced")


class Course(db.Model):
    __tablename__ = "course"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)

    # Display name only, not a reference to a user row
    instructor_name = db.Column(db.String(150), nullable=False)

    level = db.Column(db.String(20), nullable=False, default="beginner")
    category = db.Column(db.String(100), nullable=True)

    department_id = db.Column(db.Integer, db.ForeignKey("department.id"), nullable=False)
    department = db.relationship("Department", back_populates="courses")

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "instructor_name": self.instructor_name,
            "level": self.level,
            "category": self.category,
            "department_id": self.department_id,
        }
