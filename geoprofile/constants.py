"""Configuration constants for GeoProfile.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: UI application settings
    EntityPrefixes: ID prefixes for profile lines
    MapConfig: Default map view parameters
    ProfileConfig: Elevation profile synthesis parameters
    StyleConfig: Line palette and marker colors
    AnalysisConfig: AI terrain description settings
    SearchConfig: Place search (Nominatim) settings
    ChartConfig: Chart rendering dimensions
    ExportConfig: Image export settings
    ClickConfig: Click detection settings
"""

import os


class AppConfig:
    """UI application settings."""

    TITLE = "GeoProfile - Global Terrain Profile Generator"
    ICON = "⛰️"
    LAYOUT = "wide"


class EntityPrefixes:
    """ID prefixes for collection entities."""

    PROFILE = "P"


class MapConfig:
    """Default map view parameters."""

    # Initial center for program start (central China, same as the web tool)
    START_CENTER_LAT = 35.0
    START_CENTER_LON = 105.0

    DEFAULT_ZOOM = 4
    MIN_ZOOM = 2
    SEARCH_ZOOM = 10  # Zoom after flying to a search result

    # At equator, 1 degree of latitude or longitude ≈ 111,195 meters on a 6,371 km sphere
    METERS_PER_DEGREE_EQUATOR = 111_195.0

    # Map height in pixels
    MAP_HEIGHT = 500


class ProfileConfig:
    """Elevation profile synthesis parameters."""

    # Number of intervals along a segment; a profile has NUM_SAMPLES + 1 points
    NUM_SAMPLES = 50

    # Simulated provider round trip. Tests construct the service with delay_s=0.
    SIMULATED_DELAY_S = float(os.environ.get("GEOPROFILE_ELEVATION_DELAY_S", "0.8"))

    # Seed elevation: max(0, sin(lat*FREQ)*AMP + cos(lon*FREQ)*AMP + BASE)
    SEED_FREQUENCY = 10.0
    SEED_AMPLITUDE_M = 500.0
    SEED_BASE_M = 1000.0

    # Per-sample noise drawn uniformly from [-NOISE_M, NOISE_M]
    NOISE_M = 10.0

    # Large hills: sin(dist / (total / TREND_PERIODS)) * TREND_AMPLITUDE_M
    TREND_PERIODS = 3.0
    TREND_AMPLITUDE_M = 200.0
    TREND_WEIGHT = 0.05

    # Random walk step: (random() - 0.5) * WALK_STEP_M
    WALK_STEP_M = 50.0

    # Sea level floor for the running elevation
    SEA_LEVEL_M = 0.0

    # Decimal places for emitted distances and elevations
    ROUND_DECIMALS = 1


assert ProfileConfig.NUM_SAMPLES > 0, "Profile needs at least one interval"


class StyleConfig:
    """Visual colors and styling."""

    # Profile line palette, cycled by creation order
    LINE_COLORS = [
        "#EF476F",  # Pink
        "#06D6A0",  # Green
        "#118AB2",  # Blue
        "#FFD166",  # Yellow
    ]

    # Marker for the pending start point while drawing
    PENDING_MARKER_COLOR = "#4A5568"

    # Endpoint dot outline
    ENDPOINT_BORDER_COLOR = "#FFFFFF"

    # Analysis panel accent
    ANALYSIS_ACCENT_COLOR = "#8B5CF6"

    @staticmethod
    def hex_to_rgba(hex_color: str, alpha: int = 255) -> list[int]:
        """Convert '#RRGGBB' to a pydeck [R, G, B, A] list (0-255)."""
        hex_color = hex_color.lstrip("#")
        return [int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16), alpha]


assert len(StyleConfig.LINE_COLORS) > 0, "Line palette cannot be empty"


class AnalysisConfig:
    """AI terrain description settings.

    The chat model is created through LangChain's init_chat_model, so any
    provider LangChain supports can be configured. Default is Gemini.
    """

    PROVIDER = os.environ.get("GEOPROFILE_LLM_PROVIDER", "google_genai")
    MODEL = os.environ.get("GEOPROFILE_LLM_MODEL", "gemini-2.5-flash")
    TEMPERATURE = 0.0

    # Environment variables checked (in order) for the API key
    API_KEY_ENV_VARS = ("GOOGLE_API_KEY", "API_KEY")

    # Only every Nth profile point goes into the prompt
    DECIMATION_STEP = 5

    PROMPT_TEMPLATE = (
        "Analyze the landform characteristics of the following terrain profile "
        "(distance vs. elevation).\n"
        "Data: [{data}].\n"
        "Briefly describe its physical shape (for example: steep ascent, flat plateau, "
        "V-shaped valley, rolling hills) in one or two sentences."
    )


class SearchConfig:
    """Place search settings (OpenStreetMap Nominatim)."""

    NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
    USER_AGENT = "geoprofile/1.0"
    TIMEOUT_S = 10
    RESULT_LIMIT = 1


class ChartConfig:
    """Chart rendering dimensions and settings."""

    PROFILE_HEIGHT = 250
    COMBINED_HEIGHT = 450
    DEFAULT_WIDTH = 1000

    # Y-axis padding settings
    ELEVATION_PADDING_FACTOR = 0.1  # 10% padding above/below
    ELEVATION_PADDING_MIN_M = 20  # Minimum padding in meters

    AREA_FILL_ALPHA = 0.35
    LINE_WIDTH = 3
    GRID_COLOR = "rgba(163, 177, 198, 0.5)"
    BACKGROUND_COLOR = "#E0E5EC"


class ExportConfig:
    """Image export settings."""

    FILENAME_PREFIX = "terrain-profile"
    SCALE = 2  # Pixel density multiplier
    MIME_TYPE = "image/png"


class ClickConfig:
    """Click detection settings."""

    # Pydeck object types attached to our layer data
    TYPE_PROFILE_LINE = "profile_line"
    TYPE_ENDPOINT = "endpoint"
    TYPE_PENDING = "pending_start"

    # Decimal places for dedup key generation (6 decimals ≈ 10cm precision)
    DEDUP_KEY_DECIMALS = 6

