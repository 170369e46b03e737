"""Constants used throughout the cafe discovery service."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"

# Google Sheets API
SHEETS_API_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"
SHEETS_VALUE_INPUT_OPTION = "RAW"
DEFAULT_REQUEST_TIMEOUT = 10  # seconds

# Sheet layout (row 1 holds the headers)
HEADER_ROW_COUNT = 1
CAFES_SHEET = "Cafes"
CAFES_LAST_COLUMN = "R"
CAFES_READ_RANGE = "Cafes!A2:R1000"
RATINGS_SHEET = "Ratings"
RATINGS_LAST_COLUMN = "J"
RATINGS_READ_RANGE = "Ratings!A2:J1000"

# Wire-level column order, index == position in the row
CAFE_COLUMNS = (
    "id",
    "name",
    "address",
    "latitude",
    "longitude",
    "city",
    "district",
    "wifiSpeed",
    "comfortRating",
    "noiseLevel",
    "amenities",
    "operatingHours",
    "images",
    "loveCount",
    "contributorId",
    "verificationStatus",
    "createdAt",
    "updatedAt",
)
RATING_COLUMNS = (
    "ratingId",
    "cafeId",
    "sessionId",
    "wifiSpeed",
    "comfortRating",
    "noiseLevel",
    "comment",
    "photos",
    "loveGiven",
    "ratedAt",
)
CAFE_COLUMN_COUNT = len(CAFE_COLUMNS)  # 18
RATING_COLUMN_COUNT = len(RATING_COLUMNS)  # 10

# Rate Limiting Defaults (Google Sheets read quota)
DEFAULT_RATE_LIMIT_REQUESTS = 300  # Number of requests
DEFAULT_RATE_LIMIT_WINDOW = 60  # Time window in seconds

# Cache policy defaults (seconds)
DEFAULT_CACHE_STALE_TIME = 5 * 60
DEFAULT_CACHE_GC_TIME = 10 * 60
DEFAULT_CACHE_REFETCH_INTERVAL = 15 * 60

# Retry policy defaults
QUERY_MAX_RETRIES = 3
QUERY_RETRY_BASE_DELAY = 1.0  # seconds
QUERY_RETRY_MAX_DELAY = 30.0  # seconds
MUTATION_MAX_RETRIES = 1
MUTATION_RETRY_DELAY = 2.0  # seconds

# Connectivity probe
DEFAULT_CONNECTIVITY_CHECK_HOST = "sheets.googleapis.com"
DEFAULT_CONNECTIVITY_CHECK_PORT = 443
CONNECTIVITY_CHECK_TIMEOUT = 1.0  # seconds
CONNECTIVITY_CACHE_SECONDS = 5.0
