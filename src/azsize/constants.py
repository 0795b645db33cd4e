from __future__ import annotations

DEFAULT_BASE_URL = "https://www.azsize.com/api"
DEFAULT_CONFIG_DIR = "~/.azsize"

API_KEY_PREFIX = "azsk_"
API_KEY_HEADER = "X-API-Key"

DEFAULT_REGION = "eastus"
DEFAULT_COMPARE_REGIONS = ("eastus", "westus2", "centralus")
DEFAULT_SERIES_FILTER = "Standard_D"
DEFAULT_HISTORY_DAYS = 7

SIGNUP_URL = "https://www.azsize.com/signup"
DASHBOARD_URL = "https://www.azsize.com/dashboard"
AUTHENTICATED_MONTHLY_CHECKS = 50
