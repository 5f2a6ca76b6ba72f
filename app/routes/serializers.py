def department_to_dict(dept, stats=None):
    data = dept.to_dict()
    if stats is not None:
        data["stats"] = stats.as_dict()
    return data


def user_row(user):
    data = user.to_dict()
    data["status"] = "Active" if user.is_active else "Inactive"
    return data


def dashboard_payload(dashboard, notifier, **extra):
    payload = {
        "state": dashboard.state.value,
        "error": dashboard.last_error.message if dashboard.last_error else None,
        "actions": dashboard.actions,
        "notifications": notifier.as_list(),
    }
    payload.update(extra)
    return payload
