from datetime import datetime
import pytz
from flask import current_app, has_app_context


# Local time in the college's configured timezone
def local_now():
    tz_name = "Asia/Kolkata"
    if has_app_context():
        tz_name = current_app.config.get("APP_TIMEZONE", tz_name)
    return datetime.now(pytz.timezone(tz_name))
