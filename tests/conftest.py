"""
Shared fixtures: a Flask app on in-memory SQLite, a seeded college, and an
in-memory repository store for the dashboard aggregator.
"""
from types import SimpleNamespace

import pytest

from app import create_app
from app.config import TestConfig
from app.extensions import db
from app.models.department import Department
from app.services.course_service import add_course
from app.services.dashboard_service import Repositories
from app.services.user_service import create_user

PASSWORD = "secret-pass"


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def college(app):
    """CS and Math with one student, one instructor and one admin of Math."""
    cs = Department(name="CS", code="CS", description="Computer Science")
    math = Department(name="Math", code="MATH")
    db.session.add_all([cs, math])
    db.session.commit()

    s1 = create_user("s1", "s1@college.edu", "student", password=PASSWORD,
                     department_id=cs.id, student_id="S-001")
    i1 = create_user("i1", "i1@college.edu", "instructor", password=PASSWORD,
                     department_id=cs.id, employee_id="E-001")
    a1 = create_user("a1", "a1@college.edu", "department_admin", password=PASSWORD,
                     department_id=math.id)
    root = create_user("root", "root@college.edu", "super_admin", password=PASSWORD)

    algorithms = add_course("Algorithms", "i1", cs.id, level="intermediate", category="Core")
    calculus = add_course("Calculus", "Dr. Euler", math.id, level="beginner", category="Core")

    return SimpleNamespace(
        cs=cs, math=math, s1=s1, i1=i1, a1=a1, root=root,
        algorithms=algorithms, calculus=calculus,
    )


@pytest.fixture
def login(client):
    def _login(user):
        return client.post("/login", json={"email": user.email, "password": PASSWORD})
    return _login


# ----------------------------
# IN-MEMORY REPOSITORIES
# ----------------------------

class FakeStore:
    """
    Backs a Repositories bundle with plain lists and records every call.
    Names listed in `failing` raise when called.
    """

    def __init__(self):
        self.departments = [
            SimpleNamespace(id="d1", name="CS", code="CS", description=None),
            SimpleNamespace(id="d2", name="Math", code="MATH", description=None),
        ]
        self.users = [
            SimpleNamespace(id="s1", name="s1", role="student", department_id="d1"),
            SimpleNamespace(id="i1", name="i1", role="instructor", department_id="d1"),
            SimpleNamespace(id="a1", name="a1", role="department_admin", department_id="d2"),
        ]
        self.courses = [
            SimpleNamespace(id="c1", title="Algorithms", department_id="d1"),
            SimpleNamespace(id="c2", title="Calculus", department_id="d2"),
        ]
        self.admin_scopes = {"a1": "d2", "h1": "d1"}

        self.calls = []
        self.failing = set()
        self.barrier = None
        self.create_result = "created"
        self.delete_result = True

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failing:
            raise RuntimeError(f"{name} is down")

    def _wait_for_siblings(self):
        if self.barrier is not None:
            self.barrier.wait()

    def called(self, name):
        return [call for call in self.calls if call[0] == name]

    def get_department_admin_department(self, user_id):
        self._record("get_department_admin_department", user_id)
        return self.admin_scopes.get(user_id)

    def get_department_by_id(self, dept_id):
        self._record("get_department_by_id", dept_id)
        self._wait_for_siblings()
        return next((d for d in self.departments if d.id == dept_id), None)

    def get_users_by_department(self, dept_id):
        self._record("get_users_by_department", dept_id)
        self._wait_for_siblings()
        return [u for u in self.users if u.department_id == dept_id]

    def get_courses_by_department(self, dept_id):
        self._record("get_courses_by_department", dept_id)
        self._wait_for_siblings()
        return [c for c in self.courses if c.department_id == dept_id]

    def get_departments(self):
        self._record("get_departments")
        self._wait_for_siblings()
        return list(self.departments)

    def get_all_users(self):
        self._record("get_all_users")
        self._wait_for_siblings()
        return list(self.users)

    def get_courses(self):
        self._record("get_courses")
        self._wait_for_siblings()
        return list(self.courses)

    def get_department_stats(self, dept_id):
        self._record("get_department_stats", dept_id)
        members = [u for u in self.users if u.department_id == dept_id]
        return {
            "students": sum(1 for u in members if u.role == "student"),
            "instructors": sum(1 for u in members if u.role == "instructor"),
            "courses": sum(1 for c in self.courses if c.department_id == dept_id),
        }

    def create_department(self, name, code, description=None):
        self._record("create_department", name, code, description)
        if self.create_result is None:
            return None
        dept = SimpleNamespace(
            id=f"d{len(self.departments) + 1}", name=name, code=code, description=description
        )
        self.departments.append(dept)
        return dept

    def delete_department(self, dept_id):
        self._record("delete_department", dept_id)
        if not self.delete_result:
            return False
        self.departments = [d for d in self.departments if d.id != dept_id]
        return True

    def repositories(self):
        return Repositories(
            get_department_admin_department=self.get_department_admin_department,
            get_department_by_id=self.get_department_by_id,
            get_users_by_department=self.get_users_by_department,
            get_courses_by_department=self.get_courses_by_department,
            get_departments=self.get_departments,
            get_all_users=self.get_all_users,
            get_courses=self.get_courses,
            get_department_stats=self.get_department_stats,
            create_department=self.create_department,
            delete_department=self.delete_department,
        )


class RecordingNotifier:
    def __init__(self):
        self.notifications = []

    def __call__(self, notification):
        self.notifications.append(notification)

    @property
    def descriptions(self):
        return [n.description for n in self.notifications]


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()
