import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

ONTOGRAPH_LOG_LEVEL = os.getenv("ONTOGRAPH_LOG_LEVEL", "INFO")
ONTOGRAPH_IMAGE_DIR = os.getenv(
    "ONTOGRAPH_IMAGE_DIR", os.path.join(_PACKAGE_DIR, "renderer", "graphmlimages")
)
ONTOGRAPH_MAX_BLANK_DEPTH = int(os.getenv("ONTOGRAPH_MAX_BLANK_DEPTH", "256"))
ONTOGRAPH_CUSTOM_STYLE_FILE = os.getenv("ONTOGRAPH_CUSTOM_STYLE_FILE")
