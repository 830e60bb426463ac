from slowapi import Limiter
from slowapi.util import get_remote_address

from utils import AppSettings

app_settings = AppSettings()

# Shared by every router, counted per client address
limiter = Limiter(key_func=get_remote_address, enabled=app_settings.rate_limit_enabled)
