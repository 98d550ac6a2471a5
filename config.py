import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Window, in pixels
WINDOW_WIDTH = int(os.getenv("NIM_WINDOW_WIDTH", "1200"))
WINDOW_HEIGHT = int(os.getenv("NIM_WINDOW_HEIGHT", "800"))

# Timing
FRAMES_PER_SECOND = int(os.getenv("NIM_FPS", "60"))
AI_MOVE_DELAY_MS = int(os.getenv("NIM_AI_DELAY_MS", "500"))
COLOUR_CHANGE_MS = int(os.getenv("NIM_COLOUR_CHANGE_MS", "500"))
RESULT_DISPLAY_MS = int(os.getenv("NIM_RESULT_DISPLAY_MS", "3000"))

# Board
HEAPS_COUNT = int(os.getenv("NIM_HEAPS", "25"))
MAX_STONES_PER_HEAP = int(os.getenv("NIM_MAX_STONES", "40"))
HUMAN_PLAYER = os.getenv("NIM_HUMAN_PLAYER", "one")
