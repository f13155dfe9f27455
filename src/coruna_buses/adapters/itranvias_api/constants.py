"""Constants for the iTranvías (A Coruña) API adapter.

The API is undocumented. Both endpoints answer GET requests with JSON.
"""

ITRANVIAS_QUERY_URL = "https://itranvias.com/queryitr_v3.php"

# func=7 returns the whole network catalog (stops and lines) changed since "dato"
DEFAULT_STOPS_SOURCE_URL = (
    f"{ITRANVIAS_QUERY_URL}?dato=20160101T000000_gl_0_20160101T000000&func=7"
)
# func=0 returns live arrivals for one stop
DEFAULT_ARRIVALS_URL_TEMPLATE = f"{ITRANVIAS_QUERY_URL}?func=0&dato={{stop_id}}"

DEFAULT_HEADERS = {
    "Accept": "application/json",
}

# How long a placeholder catalog is served before retrying when TTL means "forever"
PLACEHOLDER_RETRY_SECONDS = 60.0

PLACEHOLDER_STOP_NAME = "Parada {stop_id}"
