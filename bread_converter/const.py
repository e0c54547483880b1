"""Constants for the bread recipe converter."""

# Conversion directions
DIRECTION_SOURDOUGH_TO_YEAST = "sourdough-to-yeast"
DIRECTION_YEAST_TO_SOURDOUGH = "yeast-to-sourdough"
DIRECTIONS = [DIRECTION_SOURDOUGH_TO_YEAST, DIRECTION_YEAST_TO_SOURDOUGH]

# Configuration and option keys
CONF_API_KEY = "api_key"
CONF_MODEL = "model"
CONF_DIRECTION = "direction"
CONF_STARTER_HYDRATION = "starter_hydration"
CONF_STRICT_UNIT_MODE = "strict_unit_mode"
CONF_FILL_MISSING_LIQUID = "fill_missing_liquid"
CONF_LEVAIN_USES_STARTER_HYDRATION = "levain_uses_starter_hydration"
CONF_USE_AI = "use_ai"

# Environment variables
ENV_API_KEY = "LANGEXTRACT_API_KEY"
ENV_MODEL = "BREAD_CONVERTER_MODEL"
ENV_STARTER_HYDRATION = "BREAD_CONVERTER_STARTER_HYDRATION"
ENV_STRICT_UNITS = "BREAD_CONVERTER_STRICT_UNITS"

# Default values
DEFAULT_MODEL = "gemini-2.5-flash-lite"
DEFAULT_STARTER_HYDRATION = 100.0
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_TEXT_LENGTH = 8000
DEFAULT_MAX_RESPONSE_SIZE = 5 * 1024 * 1024
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_TITLE = "Converted Bread Recipe"

# Available models
AVAILABLE_MODELS = [
    "gemini-2.5-flash-lite",
    "gemini-2.5-flash",
    "gemini-2.5-pro",
]

# Parser limits
MIN_LINE_LENGTH = 5
MAX_STARTER_HYDRATION = 500.0

# validate_recipe thresholds
MIN_TOTAL_FLOUR = 100
MIN_TOTAL_LIQUID = 50
MAX_HYDRATION = 100
MIN_HYDRATION_LEAN = 35
MIN_HYDRATION_ENRICHED = 25
MAX_SALT_PERCENT = 3.5

# Dough classification cut points (percent of flour)
SWEET_SUGAR_PERCENT = 15
SWEET_FAT_PERCENT = 15
ENRICHED_SUGAR_PERCENT = 5
ENRICHED_FAT_PERCENT = 5
ENRICHED_MILK_PERCENT = 20

# Sourdough -> yeast
INSTANT_YEAST_RATIO = 0.007
ACTIVE_DRY_YEAST_RATIO = 0.009
YEAST_HYDRATION_FACTOR = 0.92
ENRICHMENT_HYDRATION_BOOST = 2.0

# Yeast -> sourdough
STARTER_RATIO = 0.20
LEVAIN_STARTER_HYDRATION = 100.0
LEVAIN_SPLIT_MIN_INGREDIENTS = 3

# Validation / auto-fix pass
DEFAULT_SALT_RATIO = 0.02
MIN_SALT_PERCENT = 1.5
MAX_SALT_RANGE_PERCENT = 3.0
HYDRATION_TOLERANCE = 2.0
LARGE_HYDRATION_CORRECTION = 10.0

# Ingredient groups
GROUP_LEVAIN = "Levain"
GROUP_DOUGH = "Dough"

# Parse sources reported by the orchestration service
SOURCE_REGEX = "regex"
SOURCE_AI = "ai"
