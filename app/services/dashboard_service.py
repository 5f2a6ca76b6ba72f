"""
Dashboard aggregation and access control.

Each dashboard authorizes the session user, resolves the operator's scope,
fans out the independent repository reads and assembles an immutable
view-model. Every failure is caught here and turned into a notification;
nothing escapes to the caller.
"""
import logging
from concurrent.futures import wait
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple

from app.services.errors import (
    DashboardError,
    AuthorizationDenied,
    ScopeResolutionFailure,
    LoadFailure,
    ValidationFailure,
    MutationFailure,
    ConfirmationRequired,
    ActionUnavailable,
)

logger = logging.getLogger(__name__)

STUDENT = "student"
INSTRUCTOR = "instructor"
DEPARTMENT_ADMIN = "department_admin"
SUPER_ADMIN = "super_admin"

HOME_URL = "/"

DEFAULT = "default"
DESTRUCTIVE = "destructive"


class DashboardState(Enum):
    UNAUTHORIZED = "unauthorized"
    LOADING = "loading"
    READY = "ready"
    LOAD_ERROR = "load_error"


# ----------------------------
# SESSION / NOTIFICATIONS
# ----------------------------

@dataclass(frozen=True)
class SessionUser:
    id: Any
    role: str
    name: Optional[str] = None

    @classmethod
    def from_user(cls, user):
        if user is None:
            return None
        return cls(id=user.id, role=user.role, name=getattr(user, "name", None))


@dataclass(frozen=True)
class Notification:
    title: str
    description: Optional[str] = None
    variant: str = DEFAULT


def log_notification(notification: Notification):
    level = logging.WARNING if notification.variant == DESTRUCTIVE else logging.INFO
    logger.log(level, "%s: %s", notification.title, notification.description or "")


def error_notification(error: DashboardError) -> Notification:
    return Notification(title="Error", description=error.message, variant=DESTRUCTIVE)


def is_authorized(user, required_role) -> bool:
    """Absent user and wrong role are the same denial."""
    return user is not None and getattr(user, "role", None) == required_role


def _is_filled(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


# ----------------------------
# VIEW-MODELS
# ----------------------------

@dataclass(frozen=True)
class DepartmentStats:
    students: int = 0
    instructors: int = 0
    courses: int = 0

    @classmethod
    def from_mapping(cls, data):
        if isinstance(data, cls):
            return data
        data = data or {}
        return cls(
            students=int(data.get("students", 0)),
            instructors=int(data.get("instructors", 0)),
            courses=int(data.get("courses", 0)),
        )

    def as_dict(self):
        return {
            "students": self.students,
            "instructors": self.instructors,
            "courses": self.courses,
        }


def partition_by_role(users) -> Tuple[tuple, tuple]:
    """
    Split users into (students, instructors), keeping the given order.
    Any other role lands in neither.
    """
    students = tuple(u for u in users if u.role == STUDENT)
    instructors = tuple(u for u in users if u.role == INSTRUCTOR)
    return students, instructors


@dataclass(frozen=True)
class DepartmentAdminView:
    department: Any
    students: tuple
    instructors: tuple
    courses: tuple

    @property
    def totals(self):
        return {
            "students": len(self.students),
            "instructors": len(self.instructors),
            "courses": len(self.courses),
        }


@dataclass(frozen=True)
class SuperAdminView:
    departments: tuple
    users: tuple
    courses: tuple
    stats_by_department: Mapping[Any, DepartmentStats]

    @property
    def totals(self):
        return {
            "departments": len(self.departments),
            "students": sum(1 for u in self.users if u.role == STUDENT),
            "instructors": sum(1 for u in self.users if u.role == INSTRUCTOR),
            "courses": len(self.courses),
        }

    @property
    def admins(self):
        return tuple(u for u in self.users if u.role == DEPARTMENT_ADMIN)

    def stats_for(self, dept_id) -> DepartmentStats:
        return self.stats_by_department.get(dept_id) or DepartmentStats()

    def department_name(self, dept_id) -> str:
        for dept in self.departments:
            if dept.id == dept_id:
                return dept.name
        return "N/A"


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    error: Optional[DashboardError] = None
    value: Any = None


# ----------------------------
# REPOSITORIES
# ----------------------------

@dataclass(frozen=True)
class Repositories:
    get_department_admin_department: Callable
    get_department_by_id: Callable
    get_users_by_department: Callable
    get_courses_by_department: Callable
    get_departments: Callable
    get_all_users: Callable
    get_courses: Callable
    get_department_stats: Callable
    create_department: Callable
    delete_department: Callable

    @classmethod
    def from_services(cls):
        from app.services import course_service, department_service, user_service

        return cls(
            get_department_admin_department=user_service.get_department_admin_department,
            get_department_by_id=department_service.get_department_by_id,
            get_users_by_department=user_service.get_users_by_department,
            get_courses_by_department=course_service.get_courses_by_department,
            get_departments=department_service.get_departments,
            get_all_users=user_service.get_all_users,
            get_courses=course_service.get_courses,
            get_department_stats=department_service.get_department_stats,
            create_department=department_service.create_department,
            delete_department=department_service.delete_department,
        )


# ----------------------------
# DASHBOARDS
# ----------------------------

class Dashboard:
    """
    Shared lifecycle: UNAUTHORIZED -> LOADING -> READY | LOAD_ERROR.

    `executor` is any concurrent.futures.Executor; without one the
    independent reads of a load run inline, one after the other.
    """

    required_role = None
    action_names = ()
    unavailable_actions = ()

    def __init__(self, user: Optional[SessionUser], repositories: Repositories = None,
                 notify: Callable[[Notification], None] = None, executor=None):
        self.user = user
        self.repos = repositories or Repositories.from_services()
        self.notify = notify or log_notification
        self.executor = executor

        self.state = DashboardState.UNAUTHORIZED
        self.view = None
        self.loading = False
        self.last_error = None
        self.redirect_to = None
        self._authorized = False
        self._generation = 0

    @property
    def actions(self):
        return {name: name not in self.unavailable_actions for name in self.action_names}

    def authorize(self) -> bool:
        if self._authorized:
            return True

        if not is_authorized(self.user, self.required_role):
            self.redirect_to = HOME_URL
            logger.warning(
                "Denied %s dashboard to %s",
                self.required_role,
                getattr(self.user, "id", "anonymous")
            )
            return False

        self._authorized = True
        self.redirect_to = None
        return True

    def mount(self):
        """Authorize, then run the first load. Returns the view or None."""
        if not self.authorize():
            return None
        return self.reload()

    def reload(self):
        if not self._authorized:
            return None

        self._generation += 1
        generation = self._generation
        self.state = DashboardState.LOADING
        self.loading = True
        try:
            view = self._load()
        except DashboardError as exc:
            self._load_failed(exc, generation)
            return None
        except Exception:
            logger.exception("%s load #%s failed", self.required_role, generation)
            self._load_failed(LoadFailure(), generation)
            return None
        finally:
            self.loading = False

        # Last load to finish wins
        self.view = view
        self.state = DashboardState.READY
        self.last_error = None
        logger.info("%s load #%s ready", self.required_role, generation)
        return view

    def _load(self):
        raise NotImplementedError

    def _load_failed(self, error, generation):
        logger.info("%s load #%s ended with: %s", self.required_role, generation, error.message)
        self.state = DashboardState.LOAD_ERROR
        self.last_error = error
        self.notify(error_notification(error))

    def _gather(self, *calls):
        """
        Run independent reads and wait for all of them.
        The first failure (in call order) is re-raised.
        """
        if self.executor is None:
            return [fn(*args) for fn, *args in calls]

        futures = [self.executor.submit(fn, *args) for fn, *args in calls]
        wait(futures)
        return [future.result() for future in futures]

    def _reject(self, error):
        self.notify(error_notification(error))
        return ActionResult(ok=False, error=error)

    def _unavailable(self, action):
        logger.info("%s is not available yet", action)
        return ActionResult(ok=False, error=ActionUnavailable(f"{action} (Coming Soon)"))


class DepartmentAdminDashboard(Dashboard):
    required_role = DEPARTMENT_ADMIN
    action_names = ("add_student", "add_instructor")
    unavailable_actions = ("add_student", "add_instructor")

    def _load(self):
        dept_id = self.repos.get_department_admin_department(self.user.id)
        if not dept_id:
            raise ScopeResolutionFailure()

        department, users, courses = self._gather(
            (self.repos.get_department_by_id, dept_id),
            (self.repos.get_users_by_department, dept_id),
            (self.repos.get_courses_by_department, dept_id),
        )
        students, instructors = partition_by_role(users)
        return DepartmentAdminView(
            department=department,
            students=students,
            instructors=instructors,
            courses=tuple(courses),
        )

    def add_student(self, **details):
        return self._unavailable("Add Student")

    def add_instructor(self, **details):
        return self._unavailable("Add Instructor")


class SuperAdminDashboard(Dashboard):
    required_role = SUPER_ADMIN
    action_names = ("create_department", "delete_department", "create_admin")
    unavailable_actions = ("create_admin",)

    def _load(self):
        departments, users, courses = self._gather(
            (self.repos.get_departments,),
            (self.repos.get_all_users,),
            (self.repos.get_courses,),
        )
        stats = self._gather(
            *[(self.repos.get_department_stats, dept.id) for dept in departments]
        )
        stats_by_department = {
            dept.id: DepartmentStats.from_mapping(dept_stats)
            for dept, dept_stats in zip(departments, stats)
        }
        return SuperAdminView(
            departments=tuple(departments),
            users=tuple(users),
            courses=tuple(courses),
            stats_by_department=MappingProxyType(stats_by_department),
        )

    def create_department(self, name, code, description=None):
        if not self._authorized:
            return ActionResult(ok=False, error=AuthorizationDenied())

        if not _is_filled(name) or not _is_filled(code):
            return self._reject(ValidationFailure())
        if description is not None and not isinstance(description, str):
            return self._reject(ValidationFailure("Description must be text"))

        try:
            created = self.repos.create_department(name, code, description)
        except ValueError as exc:
            return self._reject(ValidationFailure(str(exc)))
        except Exception:
            logger.exception("create_department(%s) raised", code)
            created = None

        if created is None:
            return self._reject(MutationFailure("Failed to create department"))

        self.notify(Notification(title="Department created successfully!"))
        self.reload()
        return ActionResult(ok=True, value=created)

    def delete_department(self, dept_id, confirmed=False):
        if not self._authorized:
            return ActionResult(ok=False, error=AuthorizationDenied())

        if not confirmed:
            return ActionResult(ok=False, error=ConfirmationRequired())

        try:
            deleted = self.repos.delete_department(dept_id)
        except Exception:
            logger.exception("delete_department(%s) raised", dept_id)
            deleted = False

        if not deleted:
            return self._reject(MutationFailure("Failed to delete department"))

        self.notify(Notification(title="Department deleted"))
        self.reload()
        return ActionResult(ok=True)

    def create_admin(self, **details):
        return self._unavailable("Create Admin")
