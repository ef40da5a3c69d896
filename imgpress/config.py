"""Default settings for imgpress."""

from PIL import Image

# Compression quality, 0-100
DEFAULT_QUALITY = 75
MIN_QUALITY = 0
MAX_QUALITY = 100

# Uniform scale used when no scaling option is given
DEFAULT_PERCENT = 100

# Indexed PNG palette limits
MAX_PALETTE_SIZE = 256
MIN_PALETTE_SIZE = 2

# Resampling filter used when drawing to the target size
DEFAULT_RESAMPLE = Image.Resampling.BILINEAR

RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

# Base name used when saving a result without an explicit name
DEFAULT_DOWNLOAD_NAME = "download"

# Seconds to wait when fetching a source over HTTP
FETCH_TIMEOUT = 10

# Vector optimizer plugins applied to every SVG
DEFAULT_SVG_PLUGINS = [
    {"name": "removeComments", "active": True},
    {"name": "removeMetadata", "active": True},
    {"name": "removeEditorsNSData", "active": True},
    {"name": "cleanupWhitespace", "active": True},
]

# Overrides applied on top of the preset: keep viewBox, drop width/height
SVG_PLUGIN_OVERRIDES = [
    {"name": "removeViewBox", "active": False},
    {"name": "removeDimensions", "active": True},
]

# Size a browser gives an SVG that declares neither dimensions nor viewBox
DEFAULT_SVG_SIZE = (300, 150)
