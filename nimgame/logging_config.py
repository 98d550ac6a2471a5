import logging
import sys
from pathlib import Path

def setup_logging(debug=False, logs_dir="logs"):
    # Create logs directory if it doesn't exist
    logs_path = Path(logs_dir)
    logs_path.mkdir(exist_ok=True)

    # Keep pygame and other dependencies quiet
    logging.getLogger().setLevel(logging.WARNING)

    nimgame_logger = logging.getLogger("nimgame")
    nimgame_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Called again when the config file changes the debug flag
    for handler in list(nimgame_logger.handlers):
        nimgame_logger.removeHandler(handler)
        handler.close()

    console_formatter = logging.Formatter('%(message)s')
    file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Console shows moves and results only
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(logging.INFO)

    # File handler keeps rejected moves and AI reasoning when debugging
    file_handler = logging.FileHandler(logs_path / "nimgame.log")
    file_handler.setFormatter(file_formatter)
    file_handler.setLevel(logging.DEBUG if debug else logging.INFO)

    nimgame_logger.addHandler(console_handler)
    nimgame_logger.addHandler(file_handler)
